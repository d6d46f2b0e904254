"""Decode raw PLC register words into named tag values."""

from __future__ import annotations

from collections.abc import Sequence

from .config import Setting
from .errors import DeviceError, ErrorCode


def parse_data(data: bytes, settings: Sequence[Setting]) -> dict[str, int]:
    """Map each tag name to the little-endian word at its offset from the first tag.

    Tags whose word lies outside data are skipped. Raises DeviceError when data
    has an odd length, when there are no settings, or when nothing was decoded.
    """
    if len(data) % 2 != 0:
        raise DeviceError("", "", ErrorCode.DATA_PARSE_FAILED)
    if not settings:
        raise DeviceError("", "", ErrorCode.EMPTY_RESULT)

    base = settings[0].address
    result: dict[str, int] = {}
    for setting in settings:
        start = ((setting.address - base) & 0xFFFF) * 2
        if start + 1 >= len(data):
            continue
        result[setting.name] = int.from_bytes(data[start:start + 2], "little")

    if not result:
        raise DeviceError("", "", ErrorCode.EMPTY_RESULT)
    return result