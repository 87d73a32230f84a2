""" The :class:`Connection` sends and receives imsg frames over a single,
    already-connected duplex stream. There is no buffering and no background
    activity here: every frame is written with one :func:`socket.sendall`
    call, and every frame is read in full before it is returned.

    A :class:`Connection` does no locking. If more than one thread sends
    (or more than one thread receives) on the same instance, the caller
    must serialize those calls, otherwise frames will interleave on the
    wire.
"""

import os
import socket

from . import config
from .errors import ConnectionClosed, FormatError, SizeExceeded, StreamError
from .header import Header, HEADER_SIZE, MAX_MESSAGE_SIZE
from .log import make_logger


logger = make_logger(__name__)


class Connection:
    """ Wrap the connected *stream*, which is typically one end of a UNIX
        domain socket, though any object with the :class:`socket.socket`
        methods ``sendall()``, ``recv()``, and ``close()`` will do. The
        :class:`Connection` takes ownership of the stream: closing the
        :class:`Connection` closes the stream.

        The *pid* is the process id stamped on every outgoing header; it is
        captured once, here, and defaults to :func:`os.getpid`.

        If *compat* is True, outgoing headers always carry zero for the
        flags and peer id fields, as older imsg peers did. The default is
        taken from :data:`imsg.config.compat`.

        Deadlines are not handled here; set a timeout on the stream itself,
        and the resulting :class:`TimeoutError` will propagate unchanged.
    """

    def __init__(self, stream, pid=None, compat=None):

        if pid is None:
            pid = os.getpid()

        if compat is None:
            compat = config.compat

        self.stream = stream
        self.compat = bool(compat)

        # The property is read-only; the pid does not change for the life
        # of this connection, even across a fork().

        self._pid = pid & 0xFFFFFFFF
        self._closed = False


    def __enter__(self):
        return self


    def __exit__(self, *exception):
        self.close()


    def __iter__(self):
        """ Yield (header, payload) pairs until the peer closes the stream
            on a frame boundary. A stream that ends partway through a frame
            still raises :class:`imsg.StreamError`.
        """

        while True:
            try:
                message = self.receive()
            except ConnectionClosed:
                return

            yield message


    def __repr__(self):
        if self._closed:
            state = 'closed'
        else:
            state = 'open'

        return '<Connection pid=%d %s>' % (self._pid, state)


    @property
    def pid(self):
        return self._pid


    @property
    def closed(self):
        return self._closed


    def fileno(self):
        return self.stream.fileno()


    def close(self):
        """ Close the underlying stream. Calling this method more than once
            has no additional effect.
        """

        if self._closed:
            return

        self._closed = True
        self.stream.close()


    def send(self, type, flags=0, peerid=0, payload=b''):
        """ Send a single frame of the given *type*, with the given *flags*,
            *peerid*, and *payload* bytes. A :class:`imsg.SizeExceeded`
            exception is raised, and nothing is written, if the payload is
            larger than :data:`imsg.MAX_MESSAGE_SIZE`.

            Any exception raised by the stream is passed along as-is. After
            such a failure it is unknown how much of the frame reached the
            peer, and this :class:`Connection` should be closed.
        """

        # memoryview() refuses an int, where bytes() would quietly build a
        # zero-filled buffer of that size.

        payload = memoryview(payload).tobytes()
        size = len(payload)

        if size > MAX_MESSAGE_SIZE:
            logger.debug('refusing to send type %r: %d byte payload exceeds %d', type, size, MAX_MESSAGE_SIZE)
            raise SizeExceeded('message is too large: %d bytes, maximum is %d' % (size, MAX_MESSAGE_SIZE))

        if self.compat:
            flags = 0
            peerid = 0

        header = Header(type, HEADER_SIZE + size, flags, peerid, self._pid)

        # Header and payload go out in a single write, so that another
        # sender on this stream can never land between the two.

        self.stream.sendall(header.encode() + payload)
        logger.debug('sent %r', header)


    def receive(self):
        """ Read one complete frame from the stream, and return it as a
            (:class:`imsg.Header`, bytes) tuple. The payload is empty when
            the header declares no payload. This call blocks until the
            entire frame has arrived.

            If the stream ends before any of the header arrives,
            :class:`imsg.ConnectionClosed` is raised; if it ends partway
            through the frame, :class:`imsg.StreamError` is raised. A
            header declaring a length smaller than the header itself raises
            :class:`imsg.FormatError`. No partial frame is ever returned.
        """

        data = self._read(HEADER_SIZE, True)
        header = Header.decode(data)

        remaining = header.payload_length

        if remaining < 0:
            logger.warning('invalid frame length %d from pid %d', header.length, header.pid)
            raise FormatError('frame length %d is shorter than the header' % (header.length))

        if remaining == 0:
            payload = b''
        else:
            payload = self._read(remaining)

        logger.debug('received %r', header)
        return header, payload


    def _read(self, count, boundary=False):
        """ Read exactly *count* bytes from the stream, looping over short
            reads. If *boundary* is True, and the stream ends before any
            bytes arrive, the stream ended cleanly between frames.
        """

        buffer = bytearray()

        while len(buffer) < count:
            chunk = self.stream.recv(count - len(buffer))

            if chunk:
                buffer.extend(chunk)
                continue

            if boundary and not buffer:
                raise ConnectionClosed('stream closed by peer')

            logger.warning('stream ended after %d of %d bytes', len(buffer), count)
            raise StreamError('stream ended after %d of %d bytes' % (len(buffer), count))

        return bytes(buffer)


# end of class Connection



def pair(pid=None, compat=None):
    """ Return two connected :class:`Connection` instances built on
        :func:`socket.socketpair`. This is the usual arrangement for a
        parent process that will fork a less-privileged child: each side
        keeps one end, and closes the other.
    """

    left, right = socket.socketpair()
    return Connection(left, pid, compat), Connection(right, pid, compat)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
