""" Class representations of the two kinds of pod message: the
    :class:`Request` a host sends, and the :class:`Response` the pod sends
    back. Neither is a separate wire type; both are views onto a bencode
    :class:`Mapping`.
"""

from .. import json
from .errors import ArgsDecodeFailed, RequestMalformed
from .fields import (
    ARGS,
    DESCRIBE,
    DONE,
    ERROR,
    EX_MESSAGE,
    ID,
    INVOKE,
    OP,
    SHUTDOWN,
    STATUS,
    VALUE,
    VAR,
)
from .value import List, Mapping, Text


class Request:
    """ The :class:`Request` is the semantic content of a decoded message:
        the *op* being requested and, for invoke requests, the correlation
        *id*, the fully qualified *var* name, and the raw JSON *args*.

        The *id* and *args* are kept as the exact bytes the host sent; the
        id in particular is echoed back without reinterpretation.

        :ivar valid_ops: A set of valid strings for the request op.
    """

    valid_ops = set((DESCRIBE, INVOKE, SHUTDOWN))

    def __init__(self, op, id=None, var=None, args=None):

        if op in self.valid_ops:
            pass
        else:
            raise RequestMalformed('invalid request op: ' + repr(op))

        if isinstance(id, str):
            id = id.encode('utf-8')

        if isinstance(args, str):
            args = args.encode('utf-8')

        self.op = op
        self.id = id
        self.var = var
        self.args = args


    def __repr__(self):
        return 'Request(op=%r, id=%r, var=%r)' % (self.op, self.id, self.var)


    @classmethod
    def from_value(cls, value):
        """ Interpret a decoded top-level *value* as a request. Raises
            :class:`RequestMalformed` if it is not a mapping, names an op
            this pod does not know, or is an invoke request missing its
            id, var, or textual args.
        """

        mapping = value.as_mapping()

        if mapping is None:
            raise RequestMalformed('top-level value is not a mapping: ' + type(value).__name__)

        op = _string(mapping, OP)

        if op is None:
            raise RequestMalformed("request has no textual 'op'")

        if op not in cls.valid_ops:
            raise RequestMalformed('unknown op: ' + repr(op))

        if op != INVOKE:
            return cls(op)

        id = mapping.get(ID)
        if id is None or id.as_bytes() is None:
            raise RequestMalformed("invoke request has no textual 'id'")

        var = _string(mapping, VAR)
        if var is None:
            raise RequestMalformed("invoke request has no textual 'var'")

        args = mapping.get(ARGS)
        if args is None or args.as_bytes() is None:
            raise RequestMalformed("invoke request has missing or non-string 'args'")

        return cls(op, id.as_bytes(), var, args.as_bytes())


    def arguments(self, shape):
        """ Decode the JSON *args* of an invoke request. The args are a JSON
            array, and the first element is the argument object; it is
            returned converted to *shape*, typically a :class:`msgspec.Struct`
            subclass. Raises :class:`ArgsDecodeFailed` if the args are not
            JSON, not an array, empty, or do not match the shape.
        """

        if self.args is None:
            raise ArgsDecodeFailed('request carries no arguments')

        try:
            decoded = json.decode(self.args, list[shape])
        except json.DecodeError as e:
            raise ArgsDecodeFailed('invalid arguments for %s: %s' % (self.var, str(e))) from e

        if len(decoded) == 0:
            raise ArgsDecodeFailed('no argument object supplied for ' + str(self.var))

        return decoded[0]


# end of class Request



class Response:
    """ A :class:`Response` answers exactly one invoke request. A successful
        response carries the JSON-encoded *value*; a failed one carries the
        *error* text instead. The status list is derived from which of the
        two is present: ``["done"]`` or ``["done", "error"]``, in that order.
    """

    def __init__(self, id, value=None, error=None):

        if value is None and error is None:
            raise ValueError('a response needs either a value or an error')

        if value is not None and error is not None:
            raise ValueError('a response cannot carry both a value and an error')

        self.id = id
        self.value = value
        self.error = error


    def __repr__(self):
        if self.error is None:
            return 'Response(id=%r, value=%r)' % (self.id, self.value)
        return 'Response(id=%r, error=%r)' % (self.id, self.error)


    @classmethod
    def done(cls, id, result):
        """ Build a successful response; *result* is any Python value that
            can be JSON-encoded.
        """

        return cls(id, value=json.dumps(result))


    @classmethod
    def failed(cls, id, error):
        """ Build a failure response. The *error* may be an exception or a
            plain string; either way its text becomes the ``ex-message``.
        """

        text = str(error)

        # Some exceptions carry no text at all; the host still needs
        # something to show.

        if text == '' and isinstance(error, BaseException):
            text = type(error).__name__

        return cls(id, error=text)


    @property
    def status(self):
        if self.error is None:
            return (DONE,)
        return (DONE, ERROR)


    def to_value(self):

        entries = dict()
        entries[ID] = Text(self.id)
        entries[STATUS] = List(Text(tag) for tag in self.status)

        if self.error is None:
            entries[VALUE] = Text(self.value)
        else:
            entries[EX_MESSAGE] = Text(self.error)

        return Mapping(entries)


# end of class Response



def _string(mapping, key):
    """ Return the text stored under *key* as a str, or None if it is missing,
        not Text, or not valid UTF-8.
    """

    value = mapping.get(key)

    if value is None:
        return None

    return value.as_str()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
