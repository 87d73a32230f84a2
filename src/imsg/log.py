""" Logger construction for imsg modules. Every module logs through a child
    of the 'imsg' logger. By default that parent carries only a
    :class:`logging.NullHandler`, leaving the level and the output to the
    application; setting IMSG_LOG_LEVEL adds a stderr handler at that level.
"""

import logging
import sys

from . import config


_root = 'imsg'
_stderr = None


def make_logger(name):
    """ Return the named logger, as a child of the 'imsg' logger. If
        :data:`imsg.config.log_level` is set, the parent logger is set to
        that level and given a stderr handler; a call after
        :func:`imsg.config.reload` picks up a new level.
    """

    global _stderr

    parent = logging.getLogger(_root)

    if not parent.handlers:
        parent.addHandler(logging.NullHandler())

    if config.log_level is not None:
        parent.setLevel(config.log_level)

        if _stderr is None:
            _stderr = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s')
            _stderr.setFormatter(formatter)

        if _stderr not in parent.handlers:
            parent.addHandler(_stderr)

    if name == _root or name.startswith(_root + '.'):
        return logging.getLogger(name)

    return parent.getChild(name)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
