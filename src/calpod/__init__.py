""" Python implementation of a calendar pod: a child process that answers
    describe, invoke, and shutdown requests from a pod host, speaking bencode
    over its standard input and output.
"""

# Utility components.

from . import json
from . import config

# The protocol layer, which knows nothing about calendars.

from . import protocol

# Calendar backends.

from . import backend
from . import dates
from . import store

# Primary public-facing interfaces.

from .backend import Backend
from .store import LocalBackend
from .pod import Pod

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
