"""Protocol exceptions.

Everything that can go wrong between the raw byte stream and a decoded
request lives here. None of these conditions is fatal to the pod; the
dispatch loop decides which ones become a response and which ones are
only logged.
"""

from __future__ import annotations


class Incomplete(Exception):
    """The buffer ends before the value does; more bytes are needed.

    This is the normal state while a message is still arriving, which is
    why it is not a :class:`ProtocolError`.
    """


class ProtocolError(Exception):
    """Base class for all protocol-layer errors."""


class Malformed(ProtocolError, ValueError):
    """The bytes cannot be the start of any valid bencode value."""

    def __init__(self, reason: str, offset: int = 0):
        ProtocolError.__init__(self, f"{reason} (offset {offset})")
        self.reason = reason
        self.offset = offset


class FramingMalformed(ProtocolError):
    """The incremental reader hit malformed input and discarded its buffer."""

    def __init__(self, cause: Malformed, discarded: bytes):
        ProtocolError.__init__(self, f"discarded {len(discarded)} bytes: {cause}")
        self.cause = cause
        self.discarded = discarded


class RequestMalformed(ProtocolError):
    """A message decoded cleanly but is not a request this pod can answer."""


class ArgsDecodeFailed(ProtocolError):
    """The JSON arguments of an invoke request are unusable.

    Unlike the other protocol errors this one is reported to the host,
    as an invoke failure response.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
