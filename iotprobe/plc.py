"""Device interface and the Mitsubishi MELSEC and LS PLC devices."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .config import DeviceConfig
from .connection import IOConnection, TCPConnection
from .errors import DeviceError, ErrorCode
from .parser import parse_data
from .slmp import SLMP
from .xgt import XGT


class Device(ABC):
    """A device that can be connected to, probed and closed."""

    @abstractmethod
    def connect(self) -> None:
        """Open communication with the device."""

    @abstractmethod
    def test(self) -> dict[str, int]:
        """Read the configured tags and return their values by name."""

    @abstractmethod
    def close(self) -> None:
        """Close communication with the device."""


class PLC(Device):
    """A PLC read over a register protocol carried by an IOConnection."""

    def __init__(self, config: DeviceConfig, conn: IOConnection | None = None):
        self.config = config
        self.conn = conn if conn is not None else TCPConnection(config.address)
        self.protocol = self._make_protocol(self.conn)

    @abstractmethod
    def _make_protocol(self, conn: IOConnection) -> SLMP | XGT:
        """Return the protocol handler used to read registers."""

    def connect(self) -> None:
        """Open the underlying connection."""
        self.conn.connect()

    def read_register(self) -> bytes:
        """Read the word range spanning the first to the last configured tag."""
        settings = self.config.settings
        if not settings:
            raise DeviceError("", "", ErrorCode.EMPTY_RESULT)
        first, last = settings[0], settings[-1]
        count = (last.address - first.address + 1) & 0xFFFF
        return self.protocol.transceive(first.register, first.address, count)

    def test(self) -> dict[str, int]:
        """Read the register range and decode it into tag values."""
        return parse_data(self.read_register(), self.config.settings)

    def close(self) -> None:
        """Close the underlying connection."""
        self.conn.close()


class Melsec(PLC):
    """Mitsubishi MELSEC PLC read via SLMP."""

    def __init__(self, config: DeviceConfig, conn: IOConnection | None = None):
        super().__init__(config, conn)

    def _make_protocol(self, conn: IOConnection) -> SLMP:
        return SLMP(conn)


class LS(PLC):
    """LS PLC read via XGT."""

    def __init__(self, config: DeviceConfig, conn: IOConnection | None = None):
        super().__init__(config, conn)

    def _make_protocol(self, conn: IOConnection) -> XGT:
        return XGT(conn)