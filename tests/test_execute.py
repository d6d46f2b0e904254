import json
import types

import pytest

from iotprobe.config import DeviceConfig
from iotprobe.errors import DeviceError, ErrorCode
from iotprobe.execute import (
    center,
    format_result_json,
    format_result_table,
    run_device_test,
    run_test,
)
from iotprobe.parser import parse_data
from iotprobe.plc import Device


def _mock_init(self, config, data, connect_error=None, fail_count=0):
    self.config = config
    self.data = data
    self.connect_error = connect_error
    self.fail_count = fail_count
    self.test_calls = 0
    self.closed = 0


def _mock_connect(self):
    if self.connect_error is not None:
        raise self.connect_error


def _mock_read(self):
    self.test_calls += 1
    if self.test_calls <= self.fail_count:
        raise ValueError("read failed")
    return parse_data(self.data, self.config.settings)


def _mock_close(self):
    self.closed += 1


MockPLC = types.new_class(
    "MockPLC",
    (Device,),
    exec_body=lambda ns: ns.update(
        {
            "__init__": _mock_init,
            "connect": _mock_connect,
            "test": _mock_read,
            "close": _mock_close,
        }
    ),
)


def _empty_connect(self):
    return None


def _empty_read(self):
    return {}


def _empty_close(self):
    return None


EmptyDevice = types.new_class(
    "EmptyDevice",
    (Device,),
    exec_body=lambda ns: ns.update(
        {
            "connect": _empty_connect,
            "test": _empty_read,
            "close": _empty_close,
        }
    ),
)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "Register": "D",
                "Settings": [
                    {"address": 102, "name": "vibrate"},
                    {"address": 100, "name": "heat"},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_run_test_mocked_plc(config_file, capsys):
    created = []

    def factory(cfg):
        device = MockPLC(cfg, bytes([0x03, 0xE8, 0x07, 0xD0]))
        created.append(device)
        return device

    assert run_test("127.0.0.1:2004", factory, config_file) is None
    out = capsys.readouterr().out
    assert "✅ 테스트 성공 (1회 시도)" in out
    assert created[0].config.device == "LS"
    assert created[0].closed == 1
    assert created[0].test_calls == 1


def test_run_device_test_returns_parsed_values(config_file, capsys):
    from iotprobe.config import parse_device_config

    cfg = parse_device_config("127.0.0.1:2004", config_file)
    device = MockPLC(cfg, bytes([0x03, 0xE8, 0x07, 0xD0]))
    result = run_device_test(device)
    assert result == {"heat": 0xE803}
    assert json.loads(capsys.readouterr().out) == result


def test_retry_succeeds_on_second_attempt(config_file, capsys):
    device_holder = []

    def factory(cfg):
        device = MockPLC(cfg, bytes([0x01, 0x00]), fail_count=1)
        device_holder.append(device)
        return device

    run_test("127.0.0.1:5000", factory, config_file)
    out = capsys.readouterr().out
    assert "▶️ 테스트 시도 2회..." in out
    assert "✅ 테스트 성공 (2회 시도)" in out
    assert device_holder[0].test_calls == 2


def test_all_attempts_fail(config_file, capsys):
    device_holder = []

    def factory(cfg):
        device = MockPLC(cfg, b"\x01\x00", fail_count=10)
        device_holder.append(device)
        return device

    with pytest.raises(DeviceError) as info:
        run_test("127.0.0.1:5000", factory, config_file)
    assert info.value.error_code == ErrorCode.READ_FAILED
    assert device_holder[0].test_calls == 3
    assert device_holder[0].closed == 1
    assert "❌ 테스트 최종 실패" in capsys.readouterr().out


def test_connect_failure_code(config_file):
    def factory(cfg):
        return MockPLC(cfg, b"", connect_error=OSError("refused"))

    with pytest.raises(DeviceError) as info:
        run_test("127.0.0.1:5000", factory, config_file)
    assert info.value.error_code == ErrorCode.CONNECTION_FAILED


def test_empty_result_code():
    with pytest.raises(DeviceError) as info:
        run_device_test(EmptyDevice())
    assert info.value.error_code == ErrorCode.EMPTY_RESULT


def test_bad_input_is_config_error(config_file):
    with pytest.raises(DeviceError) as info:
        run_test("   ", config_path=config_file)
    assert info.value.error_code == ErrorCode.CONFIG_PARSE_FAILED


def test_factory_failure_carries_device_kind(config_file):
    def factory(cfg):
        raise ValueError("boom")

    with pytest.raises(DeviceError) as info:
        run_test("127.0.0.1:2004", factory, config_file)
    assert info.value.error_code == ErrorCode.CONFIG_PARSE_FAILED
    assert info.value.device_type == "LS"


def test_factory_returning_none(config_file):
    with pytest.raises(RuntimeError, match="dev is nil"):
        run_test("127.0.0.1:2004", lambda cfg: None, config_file)


def test_format_result_json_round_trip():
    result = {"vibrate": 2000, "heat": 1000}
    text = format_result_json(result)
    assert json.loads(text) == result
    assert text.index('"heat"') < text.index('"vibrate"')
    assert format_result_json({}) == "{}"


def test_format_result_table_shape():
    table = format_result_table({"heat": 1000, "vibrate": 2000})
    header, rule, values = table.split("\n")
    assert rule == "-" * (25 * 2 - 1)
    assert "heat" in header and "vibrate" in header
    assert "1000" in values and "2000" in values
    assert len(header) == len(values) == 50


@pytest.mark.parametrize(
    "text,width,expected",
    [("ab", 6, "  ab  "), ("abc", 6, " abc  "), ("toolong", 4, "toolong"), ("x", 1, "x")],
)
def test_center(text, width, expected):
    assert center(text, width) == expected


def test_unused_config_class_fields():
    cfg = DeviceConfig(device="LS", address="1.2.3.4:2004")
    with pytest.raises(DeviceError) as info:
        run_device_test(MockPLC(cfg, b"\x00\x00", connect_error=ConnectionError("x")))
    assert info.value.error_code == ErrorCode.CONNECTION_FAILED