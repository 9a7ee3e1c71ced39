""" Transport layer implementations. A transport moves whole messages to and
    from the engine; :func:`create` picks one from the host's URL scheme.
"""

from urllib.parse import urlsplit

from .base import (
    ConnectionError,
    Transport,
    TransportError,
)

from . import websocket


_backends = dict()
_backends['ws'] = websocket.WebSocket
_backends['wss'] = websocket.WebSocket


def create(host):
    """ Return an unopened :class:`Transport` for *host*, chosen by URL
        scheme. A bare ``host:port`` is taken to be a WebSocket endpoint.
    """

    host = str(host)

    if '://' not in host:
        host = 'ws://' + host

    scheme = urlsplit(host).scheme.lower()

    try:
        backend = _backends[scheme]
    except KeyError:
        raise ValueError('unsupported transport scheme: %r' % (scheme,)) from None

    return backend(host)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
