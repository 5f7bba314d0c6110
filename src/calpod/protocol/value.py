""" The four shapes a bencode value can take: :class:`Integer`, :class:`Text`,
    :class:`List`, and :class:`Mapping`. Every message on the wire is one of
    these, usually a :class:`Mapping` at the top level.

    Instances are immutable and compare structurally. The ``as_*`` accessors
    are the intended way to inspect a value of unknown shape: each returns
    None when the value is some other variant, rather than raising.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional, Tuple


INTEGER_MIN = -(2 ** 63)
INTEGER_MAX = 2 ** 63 - 1


class Value:
    """ Common base for all bencode values. Not instantiated directly.
    """

    __slots__ = ()

    def __setattr__(self, name, value):
        raise AttributeError(type(self).__name__ + ' instances are immutable')


    def __delattr__(self, name):
        raise AttributeError(type(self).__name__ + ' instances are immutable')


    def __eq__(self, other):
        if isinstance(other, Value):
            return type(self) is type(other) and self._key() == other._key()
        return NotImplemented


    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result


    def __hash__(self):
        return hash((type(self).__name__, self._key()))


    def _key(self):
        raise NotImplementedError


    def as_integer(self) -> Optional[int]:
        return None

    def as_bytes(self) -> Optional[bytes]:
        return None

    def as_str(self) -> Optional[str]:
        return None

    def as_list(self) -> Optional[Tuple['Value', ...]]:
        return None

    def as_mapping(self) -> Optional['Mapping']:
        return None


    def unwrap(self) -> Any:
        """ Return the plain Python equivalent of this value; see :func:`wrap`
            for the inverse.
        """

        raise NotImplementedError


# end of class Value



class Integer(Value):
    """ A signed integer, restricted to the 64-bit range a host is expected
        to handle.
    """

    __slots__ = ('_value',)

    def __init__(self, value: int):

        # bool is an int subclass, but True is not something the wire
        # format can express.

        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError('Integer requires an int, not ' + type(value).__name__)

        if value < INTEGER_MIN or value > INTEGER_MAX:
            raise ValueError('integer out of 64-bit range: %d' % (value))

        object.__setattr__(self, '_value', value)


    def __repr__(self):
        return 'Integer(%d)' % (self._value)


    def _key(self):
        return self._value


    def as_integer(self):
        return self._value


    def unwrap(self):
        return self._value


# end of class Integer



class Text(Value):
    """ A byte string. Text handed in as a :class:`str` is stored as its
        UTF-8 encoding; the raw bytes are what go on the wire, and they do
        not need to be valid UTF-8.
    """

    __slots__ = ('_value',)

    def __init__(self, value):

        if isinstance(value, str):
            value = value.encode('utf-8')
        elif isinstance(value, (bytearray, memoryview)):
            value = bytes(value)
        elif not isinstance(value, bytes):
            raise TypeError('Text requires str or bytes, not ' + type(value).__name__)

        object.__setattr__(self, '_value', value)


    def __repr__(self):
        return 'Text(%r)' % (self._value,)


    def __len__(self):
        return len(self._value)


    def _key(self):
        return self._value


    def as_bytes(self):
        return self._value


    def as_str(self):
        try:
            return self._value.decode('utf-8')
        except UnicodeDecodeError:
            return None


    def unwrap(self):
        decoded = self.as_str()
        if decoded is None:
            return self._value
        return decoded


# end of class Text



class List(Value):
    """ An ordered sequence of values.
    """

    __slots__ = ('_items',)

    def __init__(self, items: Iterable[Value] = ()):

        items = tuple(items)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError('List members must be Value instances, not ' + type(item).__name__)

        object.__setattr__(self, '_items', items)


    def __repr__(self):
        return 'List(%r)' % (list(self._items),)


    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)


    def __len__(self):
        return len(self._items)


    def __getitem__(self, index):
        return self._items[index]


    def _key(self):
        return self._items


    def as_list(self):
        return self._items


    def unwrap(self):
        return [item.unwrap() for item in self._items]


# end of class List



class Mapping(Value):
    """ A set of Text keys, each associated with a value. Keys may be given
        as :class:`str`, :class:`bytes`, or :class:`Text`; they are held as
        bytes. Iteration and :func:`items` always follow the byte order of
        the keys, which is also the order they are encoded in, regardless of
        the order they were supplied in.
    """

    __slots__ = ('_entries',)

    def __init__(self, entries=()):

        if hasattr(entries, 'items'):
            entries = entries.items()

        collected = dict()

        for key, value in entries:
            key = _key_bytes(key)
            if not isinstance(value, Value):
                raise TypeError('Mapping values must be Value instances, not ' + type(value).__name__)
            collected[key] = value

        ordered = dict(sorted(collected.items()))
        object.__setattr__(self, '_entries', ordered)


    def __repr__(self):
        return 'Mapping(%r)' % (self._entries,)


    def __contains__(self, key):
        try:
            key = _key_bytes(key)
        except TypeError:
            return False
        return key in self._entries


    def __getitem__(self, key):
        return self._entries[_key_bytes(key)]


    def __iter__(self) -> Iterator[bytes]:
        return iter(self._entries)


    def __len__(self):
        return len(self._entries)


    def _key(self):
        return tuple(self._entries.items())


    def get(self, key, default=None) -> Optional[Value]:
        try:
            return self[key]
        except (KeyError, TypeError):
            return default


    def items(self):
        return self._entries.items()


    def keys(self):
        return self._entries.keys()


    def as_mapping(self):
        return self


    def unwrap(self):
        unwrapped = dict()
        for key, value in self._entries.items():
            try:
                key = key.decode('utf-8')
            except UnicodeDecodeError:
                pass
            unwrapped[key] = value.unwrap()
        return unwrapped


# end of class Mapping



def _key_bytes(key):

    if isinstance(key, Text):
        return key.as_bytes()
    if isinstance(key, str):
        return key.encode('utf-8')
    if isinstance(key, bytes):
        return key

    raise TypeError('Mapping keys must be str, bytes, or Text, not ' + type(key).__name__)



def wrap(thing) -> Value:
    """ Convert a plain Python object into a :class:`Value`. Integers, strings,
        bytes, lists, tuples, and dictionaries with string keys are accepted,
        nested as deeply as necessary; anything that is already a
        :class:`Value` is returned as-is. Booleans, floats, and None have no
        bencode representation and raise :class:`TypeError`.
    """

    if isinstance(thing, Value):
        return thing
    if isinstance(thing, bool):
        raise TypeError('booleans cannot be bencoded')
    if isinstance(thing, int):
        return Integer(thing)
    if isinstance(thing, (str, bytes, bytearray)):
        return Text(thing)
    if isinstance(thing, (list, tuple)):
        return List(wrap(item) for item in thing)
    if isinstance(thing, dict):
        return Mapping((key, wrap(value)) for key, value in thing.items())

    raise TypeError('cannot bencode ' + type(thing).__name__)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
