""" Exceptions raised by the Satori access layer. Every exception defined
    here derives from :class:`SatoriError`; where a builtin exception has the
    same meaning it is also a parent, so that callers catching the builtin
    (ConnectionError, TimeoutError) see ours as well.
"""

import builtins


class SatoriError(Exception):
    """Base class for all Satori client errors."""


class NotConnectedError(SatoriError, RuntimeError):
    """A command was issued before :func:`Client.connect` was called."""


class ConnectionError(SatoriError, builtins.ConnectionError):
    """The transport to the remote engine could not be established."""


class TransportError(SatoriError):
    """ Sending or receiving failed on an established connection. The
        connection is unusable afterwards; every call pending on it fails
        with this exception.
    """


class ProtocolError(SatoriError, ValueError):
    """A malformed or field-incomplete envelope was received."""


class TimeoutError(SatoriError, builtins.TimeoutError):
    """No response arrived within the requested timeout."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
