"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from pathlib import Path

import typer

from airsensors.core.config import Settings, load_settings
from airsensors.core.errors import AirSensorsError, ChecksumMismatchError, MalformedFrameError
from airsensors.drivers.pmsa003i import PMSA003I
from airsensors.drivers.sgp30 import SGP30
from airsensors.transports.smbus import SMBusTransport

app = typer.Typer(help="Read PMSA003I particle and SGP30 gas sensors over I2C")


@app.callback()
def main(
    ctx: typer.Context,
    bus: int | None = typer.Option(None, "--bus", help="I2C bus number (default from config, else 1)"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"bus": bus, "config": config}


def _settings(ctx: typer.Context) -> Settings:
    settings = load_settings(ctx.obj["config"])
    if ctx.obj["bus"] is not None:
        settings = replace(settings, bus=ctx.obj["bus"])
    return settings


def _open_gas(settings: Settings, transport: SMBusTransport, *, with_baseline: bool) -> SGP30:
    if with_baseline and settings.baseline_file is not None:
        return SGP30(transport, settings.baseline_file, settings.baseline_interval_s)
    return SGP30(transport)


@app.command("pm")
def read_particles(
    ctx: typer.Context,
    samples: int = typer.Option(30, "--samples", min=1, help="Number of readings"),
    interval: float = typer.Option(1.0, "--interval", min=0.0, help="Seconds between readings"),
) -> None:
    """Print particle concentrations and counts."""
    try:
        settings = _settings(ctx)
        with SMBusTransport(settings.bus) as transport:
            sensor = PMSA003I(transport)
            for index in range(samples):
                if index:
                    time.sleep(interval)
                try:
                    r = sensor.read_sensor()
                except (ChecksumMismatchError, MalformedFrameError) as exc:
                    # Checksum failures could be transient
                    typer.echo(f"Error: {exc}", err=True)
                    continue
                typer.echo(f"PM1.0  {r.env_pm1:3d} μg/m3")
                typer.echo(f"PM2.5  {r.env_pm2_5:3d} μg/m3")
                typer.echo(f"PM10   {r.env_pm10:3d} μg/m3")
                typer.echo("Counters in 0.1L of air")
                typer.echo(f"{r.cnt_0_3} > 0.3μm")
                typer.echo(f"{r.cnt_0_5} > 0.5μm")
                typer.echo(f"{r.cnt_1} > 1.0μm")
                typer.echo(f"{r.cnt_2_5} > 2.5μm")
                typer.echo(f"{r.cnt_5} > 5.0μm")
                typer.echo(f"{r.cnt_10} > 10μm")
    except AirSensorsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("gas")
def read_gas(
    ctx: typer.Context,
    samples: int = typer.Option(30, "--samples", min=1, help="Number of readings"),
    interval: float = typer.Option(1.0, "--interval", min=0.0, help="Seconds between readings"),
    stop_on_good: bool = typer.Option(
        True,
        "--stop-on-good/--no-stop-on-good",
        help="Stop once readings move off the 400 ppm / 0 ppb warm-up values",
    ),
) -> None:
    """Start measurements and print CO2/TVOC readings.

    The sensor reports 400 ppm and 0 ppb for about 15 s after start, so only
    readings above both count as good. 400/0 can still be a real reading.
    """
    try:
        settings = _settings(ctx)
        with SMBusTransport(settings.bus) as transport:
            sensor = _open_gas(settings, transport, with_baseline=True)
            typer.echo(f"Serial Number: {sensor.serial_number:X}")
            sensor.start_measurements()
            for _ in range(samples):
                time.sleep(interval)
                aq = sensor.read_air_quality()
                typer.echo(f"CO2 : {aq.co2_ppm} ppm")
                typer.echo(f"TVOC: {aq.tvoc_ppb} ppb")
                if stop_on_good and aq.co2_ppm > 400 and aq.tvoc_ppb > 0:
                    typer.echo("SGP30: Good readings detected")
                    break
    except AirSensorsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("serial")
def show_serial(ctx: typer.Context) -> None:
    """Print the SGP30 serial number."""
    try:
        settings = _settings(ctx)
        with SMBusTransport(settings.bus) as transport:
            sensor = _open_gas(settings, transport, with_baseline=False)
            typer.echo(f"Serial Number: {sensor.serial_number:X}")
    except AirSensorsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("features")
def show_features(ctx: typer.Context) -> None:
    """Print the SGP30 product type and version."""
    try:
        settings = _settings(ctx)
        with SMBusTransport(settings.bus) as transport:
            features = _open_gas(settings, transport, with_baseline=False).get_features()
            typer.echo(f"Product type: {features.product_type}")
            typer.echo(f"Product version: {features.product_version}")
    except AirSensorsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("baseline")
def show_baseline(ctx: typer.Context) -> None:
    """Print the current SGP30 baseline bytes in storage order."""
    try:
        settings = _settings(ctx)
        with SMBusTransport(settings.bus) as transport:
            baseline = _open_gas(settings, transport, with_baseline=False).read_baseline()
            typer.echo(f"Baseline: {baseline.raw.hex()} (CO2 0x{baseline.co2:04x}, TVOC 0x{baseline.tvoc:04x})")
    except AirSensorsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
