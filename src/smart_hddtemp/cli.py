# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.19
# Copyright (C) 2025 HRDAG https://hrdag.org
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program; if not, see <https://www.gnu.org/licenses/>.
#
# ------
# smart-hddtemp/src/smart_hddtemp/cli.py

"""Command-line interface for drive temperature readings."""

import configparser
import json
import os
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from .config import ProbeConfig, load_config
from .display import display_report, report_frame
from .errors import SmartTempError
from .report import run

app = typer.Typer()


def _is_root() -> bool:
    return os.geteuid() == 0


@app.command()
def main(
    devices: list[str] | None = typer.Argument(
        None,
        help="Devices to probe (e.g. /dev/sda or sda); discovered if omitted"
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="INI file with [smartctl], [probe], [devices] and [display]"
    ),
    smartctl: str | None = typer.Option(
        None,
        "--smartctl",
        help="smartctl executable"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Seconds before a smartctl probe is killed"
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        "-w",
        help="Number of devices probed in parallel"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON"
    ),
    csv_output: bool = typer.Option(
        False,
        "--csv",
        help="Output results as CSV"
    ),
    no_root_check: bool = typer.Option(
        False,
        "--no-root-check",
        help="Run even when not root (smartctl usually needs root)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output"
    ),
):
    """Show the current temperature of each drive."""
    # Configure logging
    if not verbose:
        logger.remove()
        logger.add(lambda _: None)  # Suppress all logging

    err_console = Console(stderr=True)

    if json_output and csv_output:
        err_console.print("[red]--json and --csv are mutually exclusive[/red]")
        raise typer.Exit(2)

    if not no_root_check and not _is_root():
        err_console.print("[red]Must be run as root.[/red]")
        raise typer.Exit(1)

    try:
        config = load_config(config_path) if config_path else ProbeConfig()
        config = config.with_overrides(
            smartctl_path=smartctl,
            timeout=timeout,
            workers=workers,
            devices=tuple(devices) if devices else None,
        )
    except (FileNotFoundError, ValueError, configparser.Error) as e:
        err_console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    try:
        report = run(config)
    except SmartTempError as e:
        logger.error(f"Run failed: {e}")
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if json_output:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    elif csv_output:
        typer.echo(report_frame(report).write_csv(), nl=False)
    else:
        display_report(report, Console(), config.warning, config.critical)


if __name__ == "__main__":
    app()
