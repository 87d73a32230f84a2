""" The fixed-size header that precedes every imsg payload on the wire, and
    its byte encoding. The layout is five little-endian unsigned fields with
    no padding::

        offset 0  : type    u32
        offset 4  : length  u16   (header size plus payload size)
        offset 6  : flags   u16
        offset 8  : peerid  u32
        offset 12 : pid     u32
"""

import operator
import struct

from .errors import FormatError


_layout = struct.Struct('<IHHII')

HEADER_SIZE = _layout.size          # 16 bytes
MAX_MESSAGE_SIZE = 16384            # payload bytes, not counting the header

_widths = (
    ('type', 0xFFFFFFFF),
    ('length', 0xFFFF),
    ('flags', 0xFFFF),
    ('peerid', 0xFFFFFFFF),
    ('pid', 0xFFFFFFFF),
)


class Header:
    """ The :class:`Header` describes a single frame: the message *type*,
        the total frame *length* in bytes (header included), caller-defined
        *flags*, a caller-defined *peerid*, and the *pid* of the sending
        process. None of these fields carry any meaning at this layer other
        than *length*, which determines how many payload bytes follow the
        header on the wire.

        Instances cannot be modified after construction; a new
        :class:`Header` is built for every frame sent, and decoded fresh
        for every frame received.
    """

    __slots__ = ('type', 'length', 'flags', 'peerid', 'pid')

    def __init__(self, type=0, length=HEADER_SIZE, flags=0, peerid=0, pid=0):

        values = (type, length, flags, peerid, pid)

        for (name, maximum), value in zip(_widths, values):

            # operator.index() raises TypeError for anything that is not
            # an integer, such as a float.

            value = operator.index(value)

            if value < 0 or value > maximum:
                raise ValueError('header %s out of range: %r' % (name, value))

            object.__setattr__(self, name, value)


    def __setattr__(self, name, value):
        raise AttributeError('Header fields are read-only: ' + name)


    def __delattr__(self, name):
        raise AttributeError('Header fields are read-only: ' + name)


    def __eq__(self, other):
        if not isinstance(other, Header):
            return NotImplemented
        return self._fields() == other._fields()


    def __hash__(self):
        return hash(self._fields())


    def __repr__(self):
        arguments = ', '.join('%s=%d' % (name, value) for (name, _), value in zip(_widths, self._fields()))
        return 'Header(' + arguments + ')'


    def _fields(self):
        return (self.type, self.length, self.flags, self.peerid, self.pid)


    @property
    def payload_length(self):
        """ The number of payload bytes this header declares. This will be
            negative for a malformed header whose *length* is smaller than
            the header itself.
        """

        return self.length - HEADER_SIZE


    def encode(self):
        """ Return the :data:`HEADER_SIZE` byte wire representation of this
            :class:`Header`.
        """

        return _layout.pack(*self._fields())


    @classmethod
    def decode(cls, data):
        """ Reconstruct a :class:`Header` from the first :data:`HEADER_SIZE`
            bytes of *data*. A :class:`imsg.FormatError` is raised if fewer
            bytes than that are supplied. The field values are not checked
            for plausibility; that is left to the caller, who knows how many
            bytes are actually available.
        """

        if len(data) < HEADER_SIZE:
            raise FormatError('short header: %d bytes, expected %d' % (len(data), HEADER_SIZE))

        fields = _layout.unpack_from(data)
        return cls(*fields)


# end of class Header


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
