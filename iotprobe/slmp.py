"""SLMP (MC protocol 3E frame) batch read of word registers."""

from __future__ import annotations

from .connection import IOConnection
from .errors import DeviceError, ErrorCode

_HEADER = bytes(
    [
        0x50, 0x00,  # subheader
        0x00, 0x00,  # network no. / PC no.
        0xFF, 0x03,  # request destination module I/O no. (own CPU)
        0x00, 0x00,  # multidrop station
        0x0C, 0x00, 0x00, 0x00,  # request data length
        0x01, 0x04,  # command: batch read
        0x00, 0x00,  # subcommand: word units
    ]
)


def build_read_packet(register: int, start_address: int, count: int) -> bytes:
    """Build a batch-read request for count words starting at start_address."""
    start_address &= 0xFFFF
    count &= 0xFFFF
    return _HEADER + bytes(
        [
            start_address & 0xFF,
            start_address >> 8,
            0x00,
            register & 0xFF,
            count & 0xFF,
            count >> 8,
        ]
    )


def _check_response(response: bytes, count: int) -> bytes:
    if len(response) < 10:
        raise ValueError(f"PLC 응답 오류: 응답이 너무 짧습니다 ({len(response)} bytes)")
    if response[8] != 0x00 or response[9] != 0x00:
        raise ValueError(f"PLC 응답 오류: 완료 코드 = {response[9]:02X}{response[8]:02X}")
    expected = count * 2
    if len(response) < expected:
        raise ValueError(f"응답 길이 부족: expected {expected}, got {len(response)}")
    return bytes(response[len(response) - expected:])


class SLMP:
    """Request/response exchange of SLMP frames over an IOConnection."""

    def __init__(self, conn: IOConnection):
        self.conn = conn

    def transceive(self, register: int, start_address: int, count: int) -> bytes:
        """Read count words and return their raw bytes (count * 2 of them).

        Raises DeviceError when sending or receiving fails, ValueError when the
        reply carries an error completion code or is too short.
        """
        count &= 0xFFFF
        packet = build_read_packet(register, start_address, count)
        try:
            self.conn.send(packet)
        except (DeviceError, OSError) as exc:
            raise DeviceError("", "", ErrorCode.WRITE_FAILED, exc) from exc

        try:
            response = self.conn.receive()
        except (DeviceError, OSError) as exc:
            raise DeviceError("", "", ErrorCode.READ_FAILED, exc) from exc

        return _check_response(response, count)