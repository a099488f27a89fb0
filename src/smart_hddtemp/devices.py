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
# smart-hddtemp/src/smart_hddtemp/devices.py

"""Decide which block devices to probe."""

import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Final

from loguru import logger

from .errors import NoDevicesFound

SYS_BLOCK: Final[Path] = Path("/sys/block")
DEV_ROOT: Final[Path] = Path("/dev")

# Virtual or non-disk block devices under /sys/block
EXCLUDED_PREFIXES: Final[tuple[str, ...]] = (
    "loop", "ram", "zram", "dm-", "md", "sr", "fd", "zd", "nbd",
)

# Whole-disk device nodes on systems without sysfs (FreeBSD)
BSD_DISK_PATTERN: Final = re.compile(r'^(ada|da|nvme)\d+$')


def normalize_device(name: str) -> str:
    """Turn 'sda' into '/dev/sda'; absolute paths are kept as given."""
    name = name.strip()
    if name.startswith("/"):
        return name
    return str(DEV_ROOT / name)


def discover_devices(sys_block: Path = SYS_BLOCK,
                     dev_root: Path = DEV_ROOT) -> list[str]:
    """Find physical disks by reading the filesystem.

    Uses /sys/block on Linux, keeping entries that are backed by a real
    device. Falls back to scanning dev_root for whole-disk nodes.
    """
    devices = []
    if sys_block.is_dir():
        for entry in sorted(sys_block.iterdir()):
            if entry.name.startswith(EXCLUDED_PREFIXES):
                logger.debug(f"Skipping virtual device {entry.name}")
                continue
            if not (entry / "device").exists():
                logger.debug(f"Skipping {entry.name}: no backing device")
                continue
            devices.append(str(dev_root / entry.name))
    elif dev_root.is_dir():
        for entry in sorted(dev_root.iterdir()):
            if BSD_DISK_PATTERN.match(entry.name):
                devices.append(str(entry))

    logger.info(f"Discovered {len(devices)} devices: {devices}")
    return devices


def enumerate_devices(
    explicit: Iterable[str] | None = None,
    discover: Callable[[], list[str]] | None = None,
) -> list[str]:
    """Return the ordered list of devices to probe.

    Args:
        explicit: Devices from configuration or the command line; when
                  non-empty, discovery is skipped
        discover: Discovery strategy used when no devices are given,
                  discover_devices() by default

    Raises:
        NoDevicesFound: nothing was given and discovery found nothing
    """
    devices: list[str] = []
    for name in explicit or ():
        if not name.strip():
            continue
        device = normalize_device(name)
        if device in devices:
            logger.debug(f"Ignoring duplicate device {device}")
            continue
        devices.append(device)

    if devices:
        return devices

    devices = list((discover or discover_devices)())
    if not devices:
        raise NoDevicesFound("no devices given and none discovered")
    return devices
