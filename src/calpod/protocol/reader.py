""" Reconstruct complete bencode values from a byte stream that carries no
    framing of its own. The :class:`Reader` pulls a few bytes at a time,
    attempts a decode after every pull, and stops the moment a whole value
    is available, so it never consumes bytes belonging to the next message.
"""

import logging

from . import bencode
from .errors import FramingMalformed, Incomplete, Malformed

logger = logging.getLogger(__name__)


class Reader:
    """ Read bencode values from *source*, any binary stream with a
        ``read(n)`` method, such as ``sys.stdin.buffer``. The *chunk* size
        is the most bytes requested per read. Sources with a ``read1(n)``
        method are read through it, so a larger chunk never blocks waiting
        for bytes the host has not sent; for a source without one, the
        default of one byte is the only safe size.

        Bytes that arrive after the end of one value are kept and used to
        seed the next one.
    """

    def __init__(self, source, chunk=1):

        chunk = int(chunk)
        if chunk < 1:
            raise ValueError('chunk size must be at least one byte')

        self.source = source
        self._read = getattr(source, "read1", source.read)
        self.chunk = chunk
        self.buffer = bytearray()
        self.closed = False


    def __iter__(self):

        while True:
            value = self.read()
            if value is None:
                return
            yield value


    def read(self):
        """ Return the next complete :class:`Value`, or None once the stream
            has closed. Raises :class:`FramingMalformed` if the accumulated
            bytes cannot be a bencode value; the buffer has already been
            discarded when that happens, and the next call starts fresh.
        """

        if self.buffer:
            value = self._attempt()
            if value is not None:
                return value

        while not self.closed:
            received = self._read(self.chunk)

            if not received:
                self.closed = True
                break

            self.buffer.extend(received)
            value = self._attempt()
            if value is not None:
                return value

        if self.buffer:
            logger.warning("stream closed with %d bytes of an incomplete message", len(self.buffer))
            self.buffer.clear()

        return None


    def _attempt(self):
        """ Try to decode the current buffer. Returns the value if one is
            complete, None if more bytes are needed.
        """

        try:
            value, consumed = bencode.decode(self.buffer)
        except Incomplete:
            return None
        except Malformed as cause:
            discarded = bytes(self.buffer)
            self.buffer.clear()
            raise FramingMalformed(cause, discarded) from cause

        del self.buffer[:consumed]
        return value


# end of class Reader


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
