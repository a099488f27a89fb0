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
# smart-hddtemp/src/smart_hddtemp/config.py

"""Probe configuration loaded from an INI file.

Example::

    [smartctl]
    path = /usr/sbin/smartctl
    timeout_s = 5
    device_types = ata, sat, scsi, nvme
    skip_standby = false

    [probe]
    workers = 4

    [devices]
    paths = /dev/sda, /dev/sdb

    [display]
    warning_c = 60
    critical_c = 70
"""

import configparser
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from .probe import DEFAULT_TIMEOUT

DEFAULT_DEVICE_TYPES: Final[tuple[str, ...]] = ("ata", "sat", "scsi", "nvme")
DEFAULT_WORKERS: Final[int] = 4


@dataclass(frozen=True)
class ProbeConfig:
    smartctl_path: str = "smartctl"
    timeout: float = DEFAULT_TIMEOUT
    device_types: tuple[str, ...] = DEFAULT_DEVICE_TYPES
    skip_standby: bool = False
    workers: int = DEFAULT_WORKERS
    devices: tuple[str, ...] = ()
    warning: float = 60.0
    critical: float = 70.0

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    def with_overrides(self, **overrides) -> "ProbeConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def _get_list(value: str | None) -> tuple[str, ...]:
    if value is None:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def load_config(path: str | Path) -> ProbeConfig:
    """Load a ProbeConfig, using defaults for missing sections and keys."""
    parser = configparser.ConfigParser()
    read_files = parser.read(path)
    if not read_files:
        raise FileNotFoundError(f"Config file not found: {path}")

    device_types = parser.get("smartctl", "device_types", fallback=None)
    return ProbeConfig(
        smartctl_path=parser.get("smartctl", "path", fallback="smartctl"),
        timeout=parser.getfloat("smartctl", "timeout_s",
                                fallback=DEFAULT_TIMEOUT),
        device_types=(
            _get_list(device_types) if device_types is not None
            else DEFAULT_DEVICE_TYPES
        ),
        skip_standby=parser.getboolean("smartctl", "skip_standby",
                                       fallback=False),
        workers=parser.getint("probe", "workers", fallback=DEFAULT_WORKERS),
        devices=_get_list(parser.get("devices", "paths", fallback=None)),
        warning=parser.getfloat("display", "warning_c", fallback=60.0),
        critical=parser.getfloat("display", "critical_c", fallback=70.0),
    )
