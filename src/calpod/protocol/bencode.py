"""Bencode serialization for protocol values.

Layout, by leading byte:

    i<decimal>e         Integer
    <length>:<bytes>    Text
    l<value>...e        List
    d<key><value>...e   Mapping, keys are Text, sorted by byte order

There is no envelope around a message: the structure itself says where a
value ends. :func:`decode` relies on that to parse exactly one value off
the front of a buffer and report how much of it was used.
"""

from __future__ import annotations

from typing import List as ListType, Tuple

from .errors import Incomplete, Malformed
from .value import (
    INTEGER_MAX,
    INTEGER_MIN,
    Integer,
    List,
    Mapping,
    Text,
    Value,
)


# Nesting deeper than this is rejected rather than risk exhausting the
# interpreter stack on a hostile or corrupt message.
MAXIMUM_DEPTH = 256

_INTEGER = ord('i')
_LIST = ord('l')
_MAPPING = ord('d')
_END = ord('e')
_COLON = ord(':')
_MINUS = ord('-')
_DIGITS = frozenset(b'0123456789')


def encode(value: Value) -> bytes:
    """Serialize Value -> bytes."""

    chunks: ListType[bytes] = []
    _encode(value, chunks)
    return b"".join(chunks)


def _encode(value: Value, chunks: ListType[bytes]) -> None:

    if isinstance(value, Integer):
        chunks.append(b"i%de" % value.as_integer())
    elif isinstance(value, Text):
        raw = value.as_bytes()
        chunks.append(b"%d:" % len(raw))
        chunks.append(raw)
    elif isinstance(value, List):
        chunks.append(b"l")
        for item in value:
            _encode(item, chunks)
        chunks.append(b"e")
    elif isinstance(value, Mapping):
        # Mapping.items() is already in key byte order.
        chunks.append(b"d")
        for key, item in value.items():
            chunks.append(b"%d:" % len(key))
            chunks.append(key)
            _encode(item, chunks)
        chunks.append(b"e")
    else:
        raise TypeError(f"cannot bencode {type(value).__name__}")


def decode(data: bytes) -> Tuple[Value, int]:
    """Deserialize bytes -> (Value, consumed)

    Parses a single value starting at offset zero. Anything after that
    value is left alone; *consumed* is the offset where it ends.

    Raises :class:`Incomplete` if *data* is a valid prefix of a value that
    has not fully arrived yet, and :class:`Malformed` if it cannot be.
    """

    data = bytes(data)
    return _Parser(data).parse()


class _Parser:

    def __init__(self, data: bytes):
        self.data = data
        self.length = len(data)

    def parse(self) -> Tuple[Value, int]:
        return self._value(0, 0)

    def _peek(self, pos: int) -> int:
        if pos >= self.length:
            raise Incomplete()
        return self.data[pos]

    def _value(self, pos: int, depth: int) -> Tuple[Value, int]:

        lead = self._peek(pos)

        if lead == _INTEGER:
            return self._integer(pos)
        if lead in _DIGITS:
            return self._text(pos)
        if lead == _LIST or lead == _MAPPING:
            if depth >= MAXIMUM_DEPTH:
                raise Malformed(f"nesting deeper than {MAXIMUM_DEPTH}", pos)
            if lead == _LIST:
                return self._list(pos, depth + 1)
            return self._mapping(pos, depth + 1)

        raise Malformed(f"unexpected byte {bytes((lead,))!r}", pos)

    def _integer(self, pos: int) -> Tuple[Integer, int]:

        start = pos + 1
        end = start

        while True:
            byte = self._peek(end)
            if byte == _END:
                break
            if byte not in _DIGITS and byte != _MINUS:
                raise Malformed(f"unexpected byte {bytes((byte,))!r} in integer", end)
            end += 1

        digits = self.data[start:end]

        if not _canonical(digits, signed=True):
            raise Malformed(f"invalid integer {digits!r}", start)

        number = int(digits)
        if number < INTEGER_MIN or number > INTEGER_MAX:
            raise Malformed(f"integer out of 64-bit range {digits!r}", start)

        return Integer(number), end + 1

    def _text(self, pos: int) -> Tuple[Text, int]:

        end = pos

        while True:
            byte = self._peek(end)
            if byte == _COLON:
                break
            if byte not in _DIGITS:
                raise Malformed(f"unexpected byte {bytes((byte,))!r} in string length", end)
            end += 1

        digits = self.data[pos:end]

        if not _canonical(digits, signed=False):
            raise Malformed(f"invalid string length {digits!r}", pos)

        start = end + 1
        stop = start + int(digits)

        if stop > self.length:
            raise Incomplete()

        return Text(self.data[start:stop]), stop

    def _list(self, pos: int, depth: int) -> Tuple[List, int]:

        items = []
        pos += 1

        while self._peek(pos) != _END:
            item, pos = self._value(pos, depth)
            items.append(item)

        return List(items), pos + 1

    def _mapping(self, pos: int, depth: int) -> Tuple[Mapping, int]:

        entries = []
        pos += 1

        while True:
            lead = self._peek(pos)
            if lead == _END:
                break
            if lead not in _DIGITS:
                raise Malformed("mapping key is not a string", pos)

            key, pos = self._text(pos)
            item, pos = self._value(pos, depth)
            entries.append((key, item))

        # A repeated key keeps the last value; Mapping sorts the keys.
        return Mapping(entries), pos + 1


def _canonical(digits: bytes, signed: bool) -> bool:
    """Whether *digits* is a decimal number as the encoder would write it:
    no leading zeros, no '-0', and a minus sign only where allowed.
    """

    if signed and digits[:1] == b"-":
        digits = digits[1:]
        if digits == b"0":
            return False

    if not digits or not digits.isdigit():
        return False

    if len(digits) > 1 and digits[:1] == b"0":
        return False

    return True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
