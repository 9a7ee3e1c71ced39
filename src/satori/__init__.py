""" Python client for the Satori engine. A single connection carries both
    the request/response traffic of ordinary commands and the notifications
    pushed for subscribed keys.

    Typical use::

        import satori

        with satori.Satori('ws://localhost:1234', 'user', 'secret') as db:
            db.set(key='a', data=1)
            db.notify('a', print)
"""

# Utility components.

from . import json
from . import errors

# Submodules used by multiple other components.

from . import config
from . import protocol
from . import transport
home = config.directory

# Primary public-facing interfaces.

from .client import Client
from .facade import Satori
from .schema import Schema
from .lifecycle import Engine
from .protocol.commands import Command

from .errors import (
    SatoriError,
    NotConnectedError,
    ConnectionError,
    TransportError,
    ProtocolError,
    TimeoutError,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
