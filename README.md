# iotprobe

A small command-line tool that checks whether an industrial PLC on the network
answers and returns sensible register values. It connects over TCP, reads one
block of word registers, decodes the tags named in `config.json` and prints
them as JSON. A failed attempt is retried, up to three attempts in all.

The device kind is chosen from the port in the target address:

| Target                        | Device kind | Protocol |
|-------------------------------|-------------|----------|
| `IP:2004`                     | LS PLC      | XGT      |
| `IP:PORT` for any other port  | MELSEC PLC  | SLMP     |
| `IP:8193`                     | FANUC CNC   | —        |
| `IP` alone, `IP:0`, or a non-numeric port | CNC | —   |

## Installation

```
pip install .
```

## Usage

```
iotprobe 192.168.0.1:5000
```

`-h`, `-?`, `-help` and `--help` print a usage summary. The exit status is 0
on success or after help, and 1 when the address is missing or the test fails;
the failure reason is written to standard error.

A successful run prints the tag values (keys sorted) followed by a status line,
for example:

```
{
  "heat": 1000,
  "vibrate": 2000
}
✅ 테스트 성공 (1회 시도): 12.345ms
```

Each failed attempt prints a warning line, and after the last one a final
failure line with the elapsed time. With an LS PLC, the request frame is also
printed in hex before it is sent.

## Register configuration

PLC targets read the tags to fetch from `config.json` in the current
directory:

```json
{
  "Register": "D",
  "Settings": [
    {"address": 100, "name": "heat"},
    {"address": 102, "name": "vibrate"}
  ]
}
```

The first byte of `Register` selects the device memory area and must be
present. Addresses are 16-bit word addresses. Tags are sorted by address and
one block covering the lowest to the highest address is read in a single
request. Each value is a 16-bit little-endian word; a tag whose word falls
outside the returned data is left out.

## Library use

```python
from iotprobe.config import parse_device_config
from iotprobe.device import create_device
from iotprobe.execute import run_test, format_result_table

config = parse_device_config("192.168.0.1:2004", "config.json")
device = create_device(config)      # an iotprobe.plc.LS here

run_test("192.168.0.1:2004", config_path="config.json")
```

- `iotprobe.config`: `parse_device_config`, `DeviceConfig`, `Setting`.
- `iotprobe.device.create_device` returns a `Melsec` or `LS` device from
  `iotprobe.plc`; both accept an optional `conn` (any `IOConnection`) in
  place of the default `TCPConnection`.
- `iotprobe.slmp` and `iotprobe.xgt` build request frames
  (`build_read_packet`, `build_block_read_packet`) and exchange them
  (`SLMP.transceive`, `XGT.transceive`).
- `iotprobe.parser.parse_data` decodes raw register bytes into tag values.
- `iotprobe.execute`: `run_test` (takes an optional `factory` to supply the
  device), `run_device_test`, `format_result_json`, `format_result_table`,
  `center`.

Failures are raised as `iotprobe.errors.DeviceError`, which carries an
`ErrorCode`, its message and, where there is one, the underlying exception.
Malformed addresses and configuration files raise `ValueError`, which
`run_test` wraps in a `DeviceError`.

## What it does not do

FANUC CNC targets (port 8193, port 0, or no port) are recognised but cannot be
reached: `create_device` raises a `DeviceError` for them, so the test fails.
Only MELSEC (SLMP) and LS (XGT) PLCs are read.