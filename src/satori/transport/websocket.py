""" WebSocket transport, the remote engine's native endpoint. Each envelope
    travels as one text frame. The synchronous client from the websockets
    package is used so the transport fits the client's thread-based
    dispatcher.
"""

import logging
import threading

from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.sync.client import connect

from .. import errors
from .base import Transport

logger = logging.getLogger(__name__)


class WebSocket(Transport):
    """ Connect to the engine at *url* (``ws://`` or ``wss://``). Messages
        may be of any size; *open_timeout* bounds the opening handshake.
    """

    open_timeout = 10

    def __init__(self, url, open_timeout=None):

        self.url = url
        self.connection = None
        self.send_lock = threading.Lock()

        if open_timeout is not None:
            self.open_timeout = open_timeout


    @property
    def is_open(self):
        return self.connection is not None


    def open(self):

        try:
            self.connection = connect(self.url, open_timeout=self.open_timeout, max_size=None)
        except (OSError, WebSocketException) as e:
            raise errors.ConnectionError('cannot connect to %s: %s' % (self.url, e)) from e

        logger.debug('websocket open: %s', self.url)


    def close(self):

        connection = self.connection
        self.connection = None

        if connection is not None:
            connection.close()
            logger.debug('websocket closed: %s', self.url)


    def send(self, data):
        """ Send one message. The caller's thread does the writing; whole
            messages go out one at a time.
        """

        connection = self.connection

        if connection is None:
            raise errors.TransportError('%s: connection is closed' % (self.url))

        if isinstance(data, bytes):
            data = data.decode()

        try:
            with self.send_lock:
                connection.send(data)
        except (ConnectionClosed, OSError) as e:
            raise errors.TransportError('%s: send failed: %s' % (self.url, e)) from e


    def recv(self, timeout=None):
        """ Return the next text frame, or None if *timeout* seconds elapse
            without one.
        """

        connection = self.connection

        if connection is None:
            raise errors.TransportError('%s: connection is closed' % (self.url))

        try:
            return connection.recv(timeout)
        except TimeoutError:
            return None
        except (ConnectionClosed, OSError) as e:
            raise errors.TransportError('%s: receive failed: %s' % (self.url, e)) from e


# end of class WebSocket


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
