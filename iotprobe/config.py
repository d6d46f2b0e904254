"""Parse a target address into a device configuration."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_PORT_DEVICES = {2004: "LS", 8193: "FANAC", 0: "CNC"}
_NO_CONFIG_DEVICES = frozenset({"FANAC", "CNC"})


@dataclass(frozen=True)
class Setting:
    """One tag to read: register kind, word address and tag name."""

    register: int
    address: int
    name: str


@dataclass
class DeviceConfig:
    """Device kind, target address and the tags to read from it."""

    device: str
    address: str
    settings: list[Setting] = field(default_factory=list)


def _atoi(text: str) -> int | None:
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _field(obj: dict, key: str) -> Any:
    if key in obj:
        return obj[key]
    lowered = key.lower()
    for name, value in obj.items():
        if name.lower() == lowered:
            return value
    return None


def _parse_error(detail: str) -> ValueError:
    return ValueError(f"config.json 파싱 오류: {detail}")


def _parse_item(item: Any, register: int) -> Setting:
    if item is None:
        item = {}
    if not isinstance(item, dict):
        raise _parse_error("setting entry must be an object")

    address = _field(item, "address")
    if address is None:
        address = 0
    if isinstance(address, bool) or not isinstance(address, int) or not 0 <= address <= 0xFFFF:
        raise _parse_error(f"invalid address {address!r}")

    name = _field(item, "name")
    if name is None:
        name = ""
    if not isinstance(name, str):
        raise _parse_error(f"invalid name {name!r}")

    return Setting(register=register, address=address, name=name)


def _load_settings(config_path: str | Path) -> list[Setting]:
    try:
        raw = Path(config_path).read_bytes()
    except OSError as exc:
        raise ValueError(f"config.json 읽기 실패: {exc}") from exc

    try:
        doc = json.loads(raw)
    except ValueError as exc:
        raise _parse_error(str(exc)) from exc

    if doc is None:
        doc = {}
    if not isinstance(doc, dict):
        raise _parse_error("top level must be an object")

    register = _field(doc, "Register")
    if register is None:
        register = ""
    if not isinstance(register, str):
        raise _parse_error("Register must be a string")

    items = _field(doc, "Settings")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise _parse_error("Settings must be an array")

    encoded = register.encode("utf-8")
    if not encoded:
        # entries are still validated before the emptiness check
        for item in items:
            _parse_item(item, 0)
        raise ValueError("Register 값이 비어있습니다.")

    settings = [_parse_item(item, encoded[0]) for item in items]
    return sorted(settings, key=lambda s: s.address)


def parse_device_config(text: str, config_path: str | Path = "config.json") -> DeviceConfig:
    """Build a DeviceConfig from "IP" or "IP:PORT", reading tags from config_path.

    The port selects the device kind; FANAC and CNC targets need no tag file.
    Raises ValueError on malformed input or an unusable tag file.
    """
    text = text.strip()
    if not text:
        raise ValueError("IP 또는 IP:PORT 값이 입력되지 않았습니다.")

    parts = text.split(":")
    ip = parts[0]

    octets = ip.split(".")
    if len(octets) != 4:
        raise ValueError(f"IP 형식이 잘못되었습니다: {ip}")
    for part in octets:
        number = _atoi(part)
        if number is None or not 0 <= number <= 255:
            raise ValueError(f"IP 숫자 형식 오류 또는 범위 초과: {part}")

    if len(parts) == 2:
        port = _atoi(parts[1])
        device = _PORT_DEVICES.get(port if port is not None else 0, "MELSEC")
    elif len(parts) == 1:
        device = "CNC"
    else:
        raise ValueError("잘못된 IP:PORT 형식입니다. 예: 192.168.0.1:8193")

    config = DeviceConfig(device=device, address=text)
    if device not in _NO_CONFIG_DEVICES:
        config.settings = _load_settings(config_path)
    return config