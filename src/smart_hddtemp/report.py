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
# smart-hddtemp/src/smart_hddtemp/report.py

"""Probe every device and collect the outcomes into a Report."""

from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from .config import ProbeConfig
from .devices import enumerate_devices
from .errors import (
    ParseError,
    ProbeError,
    ProbeExitNonZero,
    ProbeSpawnFailed,
    ProbeTimeout,
)
from .parser import Reading, parse
from .probe import ProbeResult, probe

Outcome = Reading | ProbeError


@dataclass(frozen=True)
class Report:
    """Per-device outcomes of one run, in enumeration order."""
    devices: tuple[str, ...]
    outcomes: tuple[Outcome, ...]
    created: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if len(self.devices) != len(self.outcomes):
            raise ValueError(
                f"{len(self.devices)} devices but {len(self.outcomes)} outcomes"
            )

    def items(self) -> Iterator[tuple[str, Outcome]]:
        return zip(self.devices, self.outcomes)

    @property
    def readings(self) -> list[Reading]:
        return [o for o in self.outcomes if isinstance(o, Reading)]

    @property
    def errors(self) -> list[ProbeError]:
        return [o for o in self.outcomes if isinstance(o, ProbeError)]

    @property
    def max_temperature(self) -> int | None:
        temps = [r.temperature for r in self.readings]
        return max(temps) if temps else None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'summary': {
                'total_devices': len(self.devices),
                'ok': len(self.readings),
                'failed': len(self.errors),
                'max_temperature': self.max_temperature,
                'created': self.created.isoformat(),
            },
            'devices': [outcome.to_dict() for outcome in self.outcomes],
        }


def interpret(result: ProbeResult) -> Reading:
    """Parse a probe's output, blaming a non-zero exit when parsing fails.

    The exit status alone never fails a device: smartctl sets bits for
    informational conditions while still printing the attribute table.
    """
    try:
        return parse(result.stdout, device=result.device)
    except ParseError as e:
        if result.returncode == 0:
            raise
        detail = (f"{e.detail} (exit status {result.returncode}: "
                  f"{result.diagnostic()})")
        raise ProbeExitNonZero(result.device, result.returncode, detail) from e


def read_device(device: str, config: ProbeConfig) -> Reading:
    """Read one device's temperature, trying explicit device types on failure.

    smartctl's autodetection misses some USB bridges and RAID controllers,
    so each configured ``-d`` type is tried in turn. The first attempt's
    error is reported when every attempt fails, or when a later attempt
    times out.

    Raises:
        ProbeError: the device could not be read
        ProbeSpawnFailed: smartctl cannot be run at all
    """
    first_error = None
    for device_type in (None, *config.device_types):
        try:
            result = probe(
                device,
                smartctl=config.smartctl_path,
                timeout=config.timeout,
                device_type=device_type,
                skip_standby=config.skip_standby,
            )
        except ProbeTimeout:
            if first_error is None:
                raise
            logger.debug(f"{device} (-d {device_type}) timed out, "
                         f"stopping device type fallback")
            break
        try:
            reading = interpret(result)
        except ProbeError as e:
            logger.debug(f"{device} (-d {device_type or 'auto'}): {e}")
            if first_error is None:
                first_error = e
            continue

        logger.info(f"{device}: {reading.temperature}°{reading.unit} "
                    f"from {reading.source}")
        return reading

    raise first_error


def collect_report(devices: Sequence[str], config: ProbeConfig) -> Report:
    """Probe devices on a bounded worker pool and build the Report.

    Outcomes are stored by the device's position, so the Report follows
    the input order no matter which probe finishes first.

    Raises:
        ProbeSpawnFailed: smartctl cannot be run; pending probes are cancelled
    """
    devices = tuple(devices)
    outcomes: list[Outcome | None] = [None] * len(devices)
    if not devices:
        return Report(devices=(), outcomes=())

    workers = min(config.workers, len(devices))
    logger.info(f"Probing {len(devices)} devices with {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(read_device, device, config): index
            for index, device in enumerate(devices)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                outcomes[index] = future.result()
            except ProbeSpawnFailed:
                executor.shutdown(wait=False, cancel_futures=True)
                raise
            except ProbeError as e:
                logger.warning(f"{devices[index]}: {e.kind}: {e.detail}")
                outcomes[index] = e

    return Report(devices=devices, outcomes=tuple(outcomes))


def run(config: ProbeConfig) -> Report:
    """Enumerate devices and probe them all.

    Raises:
        NoDevicesFound: nothing to probe
        ProbeSpawnFailed: smartctl cannot be run
    """
    devices = enumerate_devices(config.devices)
    return collect_report(devices, config)
