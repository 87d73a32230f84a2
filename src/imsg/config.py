""" Process-wide defaults for imsg, drawn from the environment. The values
    are read once when this module is imported; call :func:`reload` after
    changing the environment to pick up new values.

    IMSG_COMPAT
        If set to a true value (1, true, yes, on), outgoing headers always
        carry zero for the flags and peer id fields, regardless of what the
        caller passed to :func:`imsg.Connection.send`. This matches the
        behavior of older imsg peers.

    IMSG_LOG_LEVEL
        The name of the logging level for the 'imsg' logger, for example
        DEBUG or INFO. If this is set, imsg also logs to stderr at that
        level; if it is not, the level and the output of the 'imsg' logger
        are left entirely to the application.
"""

import logging
import os


_truthy = set(('1', 'true', 'yes', 'on'))

compat = False
log_level = None


def _flag(name, default=False):

    try:
        value = os.environ[name]
    except KeyError:
        return default

    return value.strip().lower() in _truthy


def _level(name, default):

    try:
        value = os.environ[name]
    except KeyError:
        return default

    value = value.strip().upper()
    level = logging.getLevelName(value)

    # getLevelName() hands back a string, not an error, for names it
    # does not recognize.

    if isinstance(level, int):
        return level

    raise ValueError('unknown logging level in %s: %r' % (name, value))


def reload():
    """ Re-read the environment and update the module-level settings.
    """

    global compat
    global log_level

    compat = _flag('IMSG_COMPAT')
    log_level = _level('IMSG_LOG_LEVEL', None)


reload()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
