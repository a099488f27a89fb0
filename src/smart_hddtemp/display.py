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
# smart-hddtemp/src/smart_hddtemp/display.py

"""Rich table and polars frame views of a Report."""

import polars as pl
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .parser import Reading
from .report import Report

FRAME_SCHEMA = {
    'device': pl.Utf8,
    'status': pl.Utf8,
    'temperature': pl.Int64,
    'unit': pl.Utf8,
    'source': pl.Utf8,
    'vendor': pl.Utf8,
    'model': pl.Utf8,
    'error': pl.Utf8,
    'detail': pl.Utf8,
}


def get_temp_color(temp: int | None, warning: float | None,
                   critical: float | None) -> str:
    """Get color for temperature based on thresholds."""
    if temp is None:
        return "dim"

    if critical and temp >= critical:
        return "red"
    elif warning and temp >= warning:
        return "orange1"
    elif warning and temp >= (warning * 0.9):  # Within 10% of warning
        return "yellow"
    else:
        return "green"


def format_temp(reading: Reading, warning: float | None,
                critical: float | None) -> Text:
    color = get_temp_color(reading.temperature, warning, critical)
    return Text(f"{reading.temperature}°{reading.unit}", style=color)


def create_report_table(report: Report, warning: float | None = 60.0,
                        critical: float | None = 70.0) -> Table:
    """Create one row per device, in probe order."""
    table = Table(title="Drive Temperatures", show_edge=True)

    table.add_column("Device", style="cyan")
    table.add_column("Vendor")
    table.add_column("Model")
    table.add_column("Temp", justify="right")
    table.add_column("Status", justify="center")
    table.add_column("Detail", style="dim")

    for device, outcome in report.items():
        if isinstance(outcome, Reading):
            table.add_row(
                device,
                outcome.vendor or "-",
                outcome.model or "-",
                format_temp(outcome, warning, critical),
                Text("OK", style="green"),
                outcome.source,
            )
        else:
            table.add_row(
                device,
                "-",
                "-",
                Text("N/A", style="dim"),
                Text("FAIL", style="red"),
                f"{outcome.kind}: {outcome.detail}",
            )

    return table


def display_report(report: Report, console: Console | None = None,
                   warning: float | None = 60.0,
                   critical: float | None = 70.0):
    """Display a report using rich tables."""
    if console is None:
        console = Console()

    console.print(create_report_table(report, warning, critical))

    max_temp = report.max_temperature
    if max_temp is not None:
        color = get_temp_color(max_temp, warning, critical)
        console.print(f"Max temperature: [{color}]{max_temp}°C[/{color}]")
    if report.errors:
        console.print(f"[red]{len(report.errors)} of {len(report.devices)} "
                      f"devices failed[/red]")


def report_frame(report: Report) -> pl.DataFrame:
    """Flatten a report into one row per device."""
    rows = []
    for outcome in report.outcomes:
        row = dict.fromkeys(FRAME_SCHEMA)
        data = outcome.to_dict()
        row.update({k: v for k, v in data.items() if k in FRAME_SCHEMA})
        rows.append(row)
    return pl.DataFrame(rows, schema=FRAME_SCHEMA)
