import itertools

import pytest

from calpod.protocol import (
    Incomplete,
    Integer,
    List,
    Malformed,
    Mapping,
    Text,
    decode,
    encode,
    wrap,
)
from calpod.protocol.bencode import MAXIMUM_DEPTH


def test_encode_integers():

    assert encode(Integer(0)) == b'i0e'
    assert encode(Integer(42)) == b'i42e'
    assert encode(Integer(-7)) == b'i-7e'
    assert encode(Integer(2 ** 63 - 1)) == b'i9223372036854775807e'


def test_encode_text():

    assert encode(Text('')) == b'0:'
    assert encode(Text('spam')) == b'4:spam'
    assert encode(Text('é')) == b'2:\xc3\xa9'
    assert encode(Text(b'\x00\xff')) == b'2:\x00\xff'


def test_encode_containers():

    assert encode(List()) == b'le'
    assert encode(Mapping()) == b'de'
    assert encode(wrap(['a', 1, []])) == b'l1:ai1elee'
    assert encode(wrap({'op': 'describe'})) == b'd2:op8:describee'


def test_mapping_key_order():

    keys = ('status', 'id', 'value', 'ex-message', 'Zed')
    expected = b'd3:Zedi4e10:ex-messagei3e2:idi1e6:statusi0e5:valuei2ee'

    for order in itertools.permutations(range(len(keys))):
        entries = [(keys[index], Integer(index)) for index in order]
        assert encode(Mapping(entries)) == expected


def test_round_trip():

    values = (
        Integer(0),
        Integer(-(2 ** 63)),
        Text(''),
        Text(b'\xff\x00binary'),
        List(),
        Mapping(),
        wrap({'id': 'X', 'status': ['done', 'error'], 'ex-message': 'Calendar not found'}),
        wrap([[[]], {'a': {'b': [1, -2, 'c']}}, '']),
    )

    for value in values:
        encoded = encode(value)
        decoded, consumed = decode(encoded)
        assert decoded == value
        assert consumed == len(encoded)


def test_trailing_bytes_left_alone():

    value, consumed = decode(b'i1ei2e')
    assert value == Integer(1)
    assert consumed == 3

    value, consumed = decode(b'd2:op8:describeed2:op')
    assert value == wrap({'op': 'describe'})
    assert consumed == len(b'd2:op8:describee')


def test_unsorted_keys_accepted():

    value, consumed = decode(b'd1:bi2e1:ai1ee')
    assert value == wrap({'a': 1, 'b': 2})


def test_repeated_key_keeps_last():

    value, consumed = decode(b'd1:ai1e1:ai2ee')
    assert value == wrap({'a': 2})


def test_truncated_is_incomplete():

    complete = encode(wrap({'id': 'X', 'status': ['done'], 'value': '"ok"', 'n': -15}))

    # Every proper prefix of a valid encoding is merely incomplete.

    for length in range(len(complete)):
        with pytest.raises(Incomplete):
            decode(complete[:length])

    with pytest.raises(Incomplete):
        decode(b'')

    with pytest.raises(Incomplete):
        decode(b'10:short')

    with pytest.raises(Incomplete):
        decode(b'li1e')


@pytest.mark.parametrize('data', (
    b'x',
    b'e',
    b':',
    b'-1:a',
    b'ie',
    b'i-e',
    b'i-0e',
    b'i01e',
    b'i1-2e',
    b'i1.5e',
    b'i9223372036854775808e',
    b'01:a',
    b'3x:abc',
    b'di1ei2ee',
    b'dlee1:ae',
    b'lxe',
))
def test_malformed(data):

    with pytest.raises(Malformed):
        decode(data)


def test_depth_limit():

    nested = b'l' * MAXIMUM_DEPTH + b'e' * MAXIMUM_DEPTH
    value, consumed = decode(nested)
    assert consumed == len(nested)

    with pytest.raises(Malformed):
        decode(b'l' * (MAXIMUM_DEPTH + 1))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
