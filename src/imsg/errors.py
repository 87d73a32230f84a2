"""Exceptions raised by the imsg framing layer.

Errors from the underlying stream itself (:class:`OSError` and its
subclasses, including :class:`TimeoutError`) are not wrapped; they reach
the caller unchanged.
"""


class ImsgError(Exception):
    """Base class for all imsg errors."""


class SizeExceeded(ImsgError, ValueError):
    """A payload is larger than the protocol allows. Nothing was written."""


class FormatError(ImsgError, ValueError):
    """Bytes that cannot be interpreted as a frame header."""


class StreamError(ImsgError, ConnectionError):
    """The stream ended before a complete frame was read."""


class ConnectionClosed(StreamError):
    """ The peer closed the stream cleanly, on a frame boundary. This is
        still an error for :func:`Connection.receive`, but it is the normal
        way for iteration over a :class:`Connection` to finish.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
