"""Run a connection test against a device and report the values it returns."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Mapping
from pathlib import Path

from .config import DeviceConfig, parse_device_config
from .device import create_device
from .errors import DeviceError, ErrorCode
from .plc import Device

MAX_ATTEMPTS = 3
RETRY_DELAY = 0.01
COLUMN_WIDTH = 22

DeviceFactory = Callable[[DeviceConfig], "Device | None"]


def _format_duration(seconds: float) -> str:
    if seconds >= 1:
        return f"{seconds:.3f}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds * 1e6:.3f}µs"


def run_device_test(device: Device) -> dict[str, int]:
    """Connect, read the device's tags, print them as JSON and return them.

    Raises DeviceError when connecting or reading fails or nothing was read.
    """
    try:
        device.connect()
    except Exception as exc:
        raise DeviceError("", "", ErrorCode.CONNECTION_FAILED, exc) from exc

    try:
        result = device.test()
    except Exception as exc:
        raise DeviceError("", "", ErrorCode.READ_FAILED, exc) from exc

    if not result:
        raise DeviceError("", "", ErrorCode.EMPTY_RESULT)

    print(format_result_json(result))
    return dict(result)


def run_test(
    text: str,
    factory: DeviceFactory = create_device,
    config_path: str | Path = "config.json",
) -> None:
    """Test the device described by "IP" or "IP:PORT", retrying up to three times.

    Raises DeviceError when the input cannot be parsed, the device cannot be
    created, or every attempt failed (the last failure is raised).
    """
    start = time.monotonic()

    try:
        config = parse_device_config(text, config_path)
    except Exception as exc:
        raise DeviceError("", "", ErrorCode.CONFIG_PARSE_FAILED, exc) from exc

    try:
        device = factory(config)
    except Exception as exc:
        raise DeviceError(config.device, "", ErrorCode.CONFIG_PARSE_FAILED, exc) from exc

    if device is None:
        raise RuntimeError("장비 생성 실패: dev is nil")

    try:
        final_error: DeviceError | None = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            if attempt != 1:
                print(f"▶️ 테스트 시도 {attempt}회...")
            try:
                run_device_test(device)
            except DeviceError as exc:
                final_error = exc
                print(f"⚠️ 테스트 실패 ({attempt}회 시도): {exc}")
                time.sleep(RETRY_DELAY)
                continue
            elapsed = _format_duration(time.monotonic() - start)
            print(f"✅ 테스트 성공 ({attempt}회 시도): {elapsed}")
            return

        print(f"❌ 테스트 최종 실패: {_format_duration(time.monotonic() - start)}")
        assert final_error is not None
        raise final_error
    finally:
        try:
            device.close()
        except Exception as exc:
            print(f"⚠️ 장비 닫기 실패: {exc}")


def format_result_json(result: Mapping[str, int]) -> str:
    """Render result as indented JSON with keys in sorted order."""
    text = json.dumps(dict(result), indent=2, sort_keys=True, ensure_ascii=False)
    for char, escape in (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026")):
        text = text.replace(char, escape)
    return text


def format_result_table(result: Mapping[str, int]) -> str:
    """Render result as a header row of names, a rule and a row of values."""
    header = "".join(f"{center(name, COLUMN_WIDTH)} | " for name in result)
    rule = "-" * ((COLUMN_WIDTH + 3) * len(result) - 1)
    values = "".join(f"{center(str(value), COLUMN_WIDTH)} | " for value in result.values())
    return "\n".join([header, rule, values])


def center(text: str, width: int) -> str:
    """Pad text with spaces on both sides to width; the extra space goes right."""
    pad = width - len(text)
    if pad <= 0:
        return text
    left = pad // 2
    return " " * left + text + " " * (pad - left)