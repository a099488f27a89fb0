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
# smart-hddtemp/src/smart_hddtemp/__init__.py

"""Drive temperature readings from smartctl.

Run smartctl once per drive, parse the temperature attribute out of its
text output, and collect per-drive readings or errors into a report.
"""

from .config import ProbeConfig, load_config
from .devices import discover_devices, enumerate_devices
from .errors import (
    AttributeNotFound,
    MalformedValue,
    NoDevicesFound,
    ParseError,
    ProbeError,
    ProbeExitNonZero,
    ProbeSpawnFailed,
    ProbeTimeout,
    SmartTempError,
)
from .parser import Reading, parse, parse_identity
from .probe import ProbeResult, probe
from .report import Report, collect_report, read_device, run

__version__ = "0.1.0"

__all__ = [
    "AttributeNotFound",
    "MalformedValue",
    "NoDevicesFound",
    "ParseError",
    "ProbeConfig",
    "ProbeError",
    "ProbeExitNonZero",
    "ProbeResult",
    "ProbeSpawnFailed",
    "ProbeTimeout",
    "Reading",
    "Report",
    "SmartTempError",
    "collect_report",
    "discover_devices",
    "enumerate_devices",
    "load_config",
    "parse",
    "parse_identity",
    "probe",
    "read_device",
    "run",
]
