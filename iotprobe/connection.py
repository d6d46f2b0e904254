"""Connection interfaces and a TCP implementation."""

from __future__ import annotations

import socket
from abc import ABC, abstractmethod

from .errors import DeviceError, ErrorCode

_RECEIVE_SIZE = 2048


class Connection(ABC):
    """Lifecycle of a link to an external device or service."""

    @abstractmethod
    def connect(self) -> None:
        """Open the link; raise on failure."""

    @abstractmethod
    def close(self) -> None:
        """Close the link and release its resources."""


class IOConnection(Connection):
    """A connection that can send and receive bytes."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Send data; raise on failure."""

    @abstractmethod
    def receive(self) -> bytes:
        """Return the next chunk of received data; raise on failure."""


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port_text = address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not (port_text.isascii() and port_text.isdigit()):
        raise ValueError(f"invalid port {port_text!r}")
    port = int(port_text)
    if port > 0xFFFF:
        raise ValueError(f"invalid port {port_text!r}")
    return host, port


class TCPConnection(IOConnection):
    """A TCP client connection to "host:port"."""

    def __init__(self, address: str):
        self.address = address
        self._sock: socket.socket | None = None

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("not connected")
        return self._sock

    def connect(self) -> None:
        """Open the TCP connection; raise DeviceError on failure."""
        try:
            host, port = _split_address(self.address)
            sock = socket.create_connection((host, port))
        except (OSError, ValueError) as exc:
            raise DeviceError("", "", ErrorCode.CONNECTION_FAILED, exc) from exc
        self.close()
        self._sock = sock

    def send(self, data: bytes) -> None:
        """Write all of data; raise DeviceError on failure."""
        try:
            self._socket().sendall(data)
        except OSError as exc:
            raise DeviceError("", "", ErrorCode.WRITE_FAILED, exc) from exc

    def receive(self) -> bytes:
        """Read up to 2048 bytes; raise DeviceError on failure or end of stream."""
        try:
            data = self._socket().recv(_RECEIVE_SIZE)
        except OSError as exc:
            raise DeviceError("", "", ErrorCode.READ_FAILED, exc) from exc
        if not data:
            exc = EOFError("connection closed by peer")
            raise DeviceError("", "", ErrorCode.READ_FAILED, exc) from exc
        return data

    def close(self) -> None:
        """Close the connection if it is open."""
        sock, self._sock = self._sock, None
        if sock is not None:
            sock.close()

    def __enter__(self) -> TCPConnection:
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()