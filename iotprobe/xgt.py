"""LS XGT FEnet continuous (block) read of word registers."""

from __future__ import annotations

import struct

from .connection import IOConnection
from .errors import DeviceError, ErrorCode

_COMPANY_ID = b"LSIS-XGT\x00\x00"
_PLC_INFO = b"\x00\x00"
_CPU_INFO = b"\x00"
_SOURCE_CLIENT = b"\x33"
_INVOKE_ID = b"\x00\x00"
_FRAME_ID = b"\x00\x00"

_CMD_READ = 0x54
_TYPE_CONTINUOUS = 0x14
_BLOCK_COUNT = 0x01
_NAME_LENGTH = 0x06


def build_block_read_packet(register: int, start_address: int, count: int) -> bytes:
    """Build a continuous-read request for count words from the given register.

    The variable is addressed in bytes, e.g. register 'D', word 100 -> "%DB200".
    """
    byte_address = (start_address * 2) & 0xFFFF
    name = f"%{chr(register & 0xFF)}B{byte_address}".encode("utf-8")
    body = (
        struct.pack("<5H", _CMD_READ, _TYPE_CONTINUOUS, 0x00, _BLOCK_COUNT, _NAME_LENGTH)
        + name
        + struct.pack("<H", (count * 2) & 0xFFFF)
    )
    header = (
        _COMPANY_ID
        + _PLC_INFO
        + _CPU_INFO
        + _SOURCE_CLIENT
        + _INVOKE_ID
        + struct.pack("<H", len(body) & 0xFFFF)
        + _FRAME_ID
    )
    return header + body


class XGT:
    """Request/response exchange of XGT frames over an IOConnection."""

    def __init__(self, conn: IOConnection):
        self.conn = conn

    def transceive(self, register: int, start_address: int, count: int) -> bytes:
        """Read count words and return their raw bytes (count * 2 of them).

        Raises DeviceError when sending or receiving fails, ValueError when the
        reply carries an error status or is too short.
        """
        count &= 0xFFFF
        packet = build_block_read_packet(register, start_address, count)
        print(f"전송 패킷: {packet.hex(' ').upper()}")

        try:
            self.conn.send(packet)
        except (DeviceError, OSError) as exc:
            raise DeviceError("", "", ErrorCode.WRITE_FAILED, exc) from exc

        try:
            response = self.conn.receive()
        except (DeviceError, OSError) as exc:
            raise DeviceError("", "", ErrorCode.READ_FAILED, exc) from exc

        if len(response) < 10:
            raise ValueError(f"PLC 응답 오류: 응답이 너무 짧습니다 ({len(response)} bytes)")
        if response[8] != 0x00 or response[9] != 0x00:
            raise ValueError(f"PLC 응답 오류: 완료 코드 = {response[9]:02X}{response[8]:02X}")
        expected = count * 2
        if len(response) < expected:
            raise ValueError(f"응답 길이 부족: expected {expected}, got {len(response)}")
        return bytes(response[len(response) - expected:])