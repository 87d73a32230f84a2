""" Python implementation of imsg: discrete, typed messages exchanged over
    an already-connected duplex byte stream, as used between the privileged
    and unprivileged halves of a privilege-separated program.
"""

# Utility components.

from . import config
from . import errors
from . import log

# The wire format, and the connection wrapper built on it.

from . import header
from . import connection

# Primary public-facing interfaces.

from .header import Header, HEADER_SIZE, MAX_MESSAGE_SIZE
from .connection import Connection, pair
from .errors import ImsgError, SizeExceeded, FormatError, StreamError, ConnectionClosed

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
