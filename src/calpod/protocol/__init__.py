"""
calpod Protocol Layer
=====================

This package defines the message protocol a pod speaks with its host over
standard input and output. It covers everything from raw bytes up to a
request the pod can act on; it knows nothing about calendars.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Pod (calpod.pod)
    Dispatch state machine
    - describe
    - invoke
    - shutdown

    │
    ▼
Message Model (message.py)
    Semantic views of a decoded mapping
    - Request
    - Response

    │
    ▼
Incremental Reader (reader.py)
    Reconstructs whole values from a byte stream
    - no length header, structure alone delimits a message
    - never reads past the end of a value

    │
    ▼
Codec (bencode.py)
    Value <-> bytes
    - encode(): deterministic, sorted mapping keys
    - decode(): one value, or Incomplete, or Malformed

    │
    ▼
Value Model (value.py)
    Immutable Integer / Text / List / Mapping

Field Vocabulary (fields.py)
    Canonical names for request and response keys

Errors (errors.py)
    Incomplete, Malformed, FramingMalformed, RequestMalformed,
    ArgsDecodeFailed

---------------------------------------------------------------------
"""

from . import errors
from . import fields
from . import value
from . import bencode
from . import reader
from . import message

from .errors import (
    ArgsDecodeFailed,
    FramingMalformed,
    Incomplete,
    Malformed,
    ProtocolError,
    RequestMalformed,
)
from .value import Integer, List, Mapping, Text, Value, wrap
from .bencode import decode, encode
from .reader import Reader
from .message import Request, Response


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
