"""
Satori Protocol Layer
=====================

This package defines the envelopes exchanged with the remote engine and the
vocabulary of command tags. It MUST NOT depend on any transport
implementation; encoding stops at bytes.

    fields.py      canonical names for envelope keys
    commands.py    the closed Command enumeration
    message.py     Request, Response, Notification, and parse()
"""

from . import fields
from . import commands
from . import message

from .commands import Command
from .message import Notification, Request, Response, parse


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
