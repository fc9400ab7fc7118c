from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from airsensors import cli
from airsensors.transports.playback import Op, PlaybackTransport

GOOD_FRAME = bytes.fromhex("424d001c000000010005000000010005007e002a000f000900030003970002 14")
GOOD_SERIAL = bytes.fromhex("000081 01579c aca254")
GOOD_BASELINE = bytes.fromhex("88a158 8dc461")
SERIAL_OP = Op(0x58, bytes.fromhex("3682"), GOOD_SERIAL)

runner = CliRunner()


class FakeBus(PlaybackTransport):
    instances: list[FakeBus] = []
    script: list[Op] = []

    def __init__(self, bus: int = 1) -> None:
        super().__init__(self.script)
        self.bus = bus
        self.closed = False
        FakeBus.instances.append(self)

    def __enter__(self) -> FakeBus:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True


@pytest.fixture
def fake_bus(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setattr(cli, "SMBusTransport", FakeBus)
    FakeBus.instances = []

    def script(*ops: Op) -> None:
        FakeBus.script = list(ops)

    return script


def test_pm_command(fake_bus) -> None:
    fake_bus(Op(0x12, b"", GOOD_FRAME), Op(0x12, b"", GOOD_FRAME))
    result = runner.invoke(cli.app, ["pm", "--samples", "1", "--interval", "0"])
    assert result.exit_code == 0
    assert "PM2.5    1 μg/m3" in result.stdout
    assert "126 > 0.3μm" in result.stdout
    assert FakeBus.instances[0].closed


def test_pm_command_continues_after_bad_frame(fake_bus) -> None:
    fake_bus(
        Op(0x12, b"", GOOD_FRAME),
        Op(0x12, b"", GOOD_FRAME[:30] + b"\x00\x00"),
        Op(0x12, b"", GOOD_FRAME),
    )
    result = runner.invoke(cli.app, ["pm", "--samples", "2", "--interval", "0"])
    assert result.exit_code == 0
    assert "Error: Bad checksum" in result.stderr
    assert "PM10     5 μg/m3" in result.stdout


def test_pm_command_missing_sensor_is_clean(fake_bus) -> None:
    fake_bus()
    result = runner.invoke(cli.app, ["pm", "--samples", "1"])
    assert result.exit_code == 1
    assert "Error:" in result.stderr
    assert "Traceback" not in result.stdout
    assert "Traceback" not in result.stderr


def test_serial_command_uses_bus_option(fake_bus) -> None:
    fake_bus(SERIAL_OP)
    result = runner.invoke(cli.app, ["--bus", "4", "serial"])
    assert result.exit_code == 0
    assert "Serial Number: 157ACA2" in result.stdout
    assert FakeBus.instances[0].bus == 4


def test_features_command(fake_bus) -> None:
    fake_bus(SERIAL_OP, Op(0x58, bytes.fromhex("202f"), bytes.fromhex("002265")))
    result = runner.invoke(cli.app, ["features"])
    assert result.exit_code == 0
    assert "Product version: 34" in result.stdout


def test_baseline_command(fake_bus) -> None:
    fake_bus(SERIAL_OP, Op(0x58, bytes.fromhex("2015"), GOOD_BASELINE))
    result = runner.invoke(cli.app, ["baseline"])
    assert result.exit_code == 0
    assert "Baseline: 88a1588dc461" in result.stdout


def test_gas_command_restores_baseline_from_config(fake_bus, tmp_path: Path) -> None:
    baseline_file = tmp_path / "baseline"
    baseline_file.write_bytes(GOOD_BASELINE)
    config = tmp_path / "config.yaml"
    config.write_text(f"sgp30:\n  baseline_file: {baseline_file}\n  baseline_interval_s: 3600\n")

    fake_bus(
        SERIAL_OP,
        Op(0x58, bytes.fromhex("2003")),
        Op(0x58, bytes.fromhex("201e8dc46188a158")),
        Op(0x58, bytes.fromhex("2003")),
        Op(0x58, bytes.fromhex("2008")),
        Op(0x58, b"", bytes.fromhex("019e53000dcd")),
    )
    result = runner.invoke(
        cli.app,
        ["--config", str(config), "gas", "--samples", "1", "--interval", "0"],
    )
    assert result.exit_code == 0, result.stderr
    assert "CO2 : 414 ppm" in result.stdout
    assert "TVOC: 13 ppb" in result.stdout
    assert FakeBus.instances[0].done


def test_bad_config_is_clean_error(fake_bus, tmp_path: Path) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("bus: many\n")
    result = runner.invoke(cli.app, ["--config", str(config), "serial"])
    assert result.exit_code == 1
    assert "Schema validation failed" in result.stderr


def test_gas_command_stops_on_good_readings(fake_bus) -> None:
    fake_bus(
        SERIAL_OP,
        Op(0x58, bytes.fromhex("2003")),
        Op(0x58, bytes.fromhex("2008")),
        Op(0x58, b"", bytes.fromhex("01904c000081")),
        Op(0x58, bytes.fromhex("2008")),
        Op(0x58, b"", bytes.fromhex("019e53000dcd")),
    )
    result = runner.invoke(cli.app, ["gas", "--samples", "5", "--interval", "0"])
    assert result.exit_code == 0, result.stderr
    assert "CO2 : 400 ppm" in result.stdout
    assert "SGP30: Good readings detected" in result.stdout
    assert result.stdout.count("CO2 :") == 2
    assert FakeBus.instances[0].done


def test_gas_command_can_keep_reading(fake_bus) -> None:
    fake_bus(
        SERIAL_OP,
        Op(0x58, bytes.fromhex("2003")),
        Op(0x58, bytes.fromhex("2008")),
        Op(0x58, b"", bytes.fromhex("019e53000dcd")),
        Op(0x58, bytes.fromhex("2008")),
        Op(0x58, b"", bytes.fromhex("019e53000dcd")),
    )
    result = runner.invoke(
        cli.app, ["gas", "--samples", "2", "--interval", "0", "--no-stop-on-good"]
    )
    assert result.exit_code == 0, result.stderr
    assert result.stdout.count("CO2 : 414 ppm") == 2
    assert "Good readings detected" not in result.stdout
