import pytest
import socket

import imsg


@pytest.fixture
def sockets():
    """ A connected pair of plain sockets, for tests that want to see the
        raw bytes on one side of a :class:`imsg.Connection`.
    """

    left, right = socket.socketpair()
    left.settimeout(5)
    right.settimeout(5)

    yield left, right

    left.close()
    right.close()


@pytest.fixture
def connections():

    sender, receiver = imsg.pair(pid=42)
    sender.stream.settimeout(5)
    receiver.stream.settimeout(5)

    yield sender, receiver

    sender.close()
    receiver.close()


@pytest.fixture
def environment(monkeypatch):
    """ Clear the imsg environment variables, and put the module-level
        configuration back the way it was once the test is done.
    """

    monkeypatch.delenv('IMSG_COMPAT', raising=False)
    monkeypatch.delenv('IMSG_LOG_LEVEL', raising=False)
    imsg.config.reload()

    yield monkeypatch

    monkeypatch.undo()
    imsg.config.reload()


class Trickle:
    """ A stand-in for a stream socket that hands back at most one byte
        per recv() call, the worst case a stream transport is allowed.
    """

    def __init__(self, data):
        self.data = bytearray(data)
        self.sent = bytearray()
        self.closed = False

    def recv(self, size):
        chunk = bytes(self.data[:1])
        del self.data[:1]
        return chunk

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        self.closed = True

    def fileno(self):
        return -1


@pytest.fixture
def trickle():
    return Trickle


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
