"""Create the device object that matches a device configuration."""

from __future__ import annotations

from .config import DeviceConfig
from .errors import DEVICE_TYPE_FANUC, PROTOCOL_TYPE_FOCAS, DeviceError, ErrorCode
from .plc import LS, Device, Melsec


def _build(config: DeviceConfig) -> Device:
    brand = config.device.lower()
    if brand in ("melsec", "mel"):
        return Melsec(config)
    if brand == "ls":
        return LS(config)
    if brand in ("fanac", "cnc"):
        reason = RuntimeError(f"FOCAS 핸들 할당 실패 (address: {config.address})")
        raise DeviceError(
            DEVICE_TYPE_FANUC, PROTOCOL_TYPE_FOCAS, ErrorCode.DEVICE_CREATE_FAILED, reason
        )
    raise ValueError(f"객체 생성 실패: 알 수 없는 brand (address: {config.address})")


def create_device(config: DeviceConfig) -> Device:
    """Return a Melsec or LS device for config.

    Raises DeviceError for FANUC CNC targets, which cannot be reached here,
    and ValueError for an unknown device kind.
    """
    try:
        return _build(config)
    except Exception as exc:
        print(f">> DeviceFactory 리턴 : {exc}")
        raise