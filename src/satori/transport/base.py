"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`satori.protocol` so the protocol remains
transport-agnostic. A transport moves whole messages as bytes; it knows
nothing about envelopes or correlation ids.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Union

from ..errors import ConnectionError, TransportError


class Transport(ABC):
    """ Minimal contract for a duplex message channel.

        :func:`recv` is only ever called from one thread (the client's
        dispatcher); :func:`send` may be called from any thread and must
        serialize itself.
    """

    @abstractmethod
    def open(self) -> None:
        """Establish the connection; raise ConnectionError on failure."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the connection."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Send one message; raise TransportError on failure."""

    @abstractmethod
    def recv(self, timeout: Optional[float] = None) -> Optional[Union[bytes, str]]:
        """ Receive the next message. Returns None if nothing arrived within
            *timeout* seconds; raises TransportError if the connection is
            lost.
        """

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False


__all__ = ('ConnectionError', 'Transport', 'TransportError')
