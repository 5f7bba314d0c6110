''' Wrapper module providing the equivalent of :func:`json.loads` and
    :func:`json.dumps`, backed by msgspec. The JSON carried inside bencode
    messages (invoke arguments, result values) all passes through here.
'''

import msgspec


# The msgspec 'encode' operation returns bytes; everything in this package
# that builds a bencode Text from JSON expects bytes, so 'dumps' does too.

encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

DecodeError = msgspec.DecodeError
ValidationError = msgspec.ValidationError


def decode(payload, type):
    """ Decode the JSON *payload* directly into the requested *type*, which
        can be any type msgspec understands, such as ``list[SomeStruct]``.
        Raises :class:`msgspec.ValidationError` if the document does not have
        the expected shape, or :class:`msgspec.DecodeError` if it is not
        JSON at all.
    """

    return msgspec.json.decode(payload, type=type)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
