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
# smart-hddtemp/src/smart_hddtemp/probe.py

"""Run smartctl against a single device."""

import errno
import subprocess
import time
from dataclasses import dataclass
from typing import Final

from loguru import logger

from .errors import ProbeSpawnFailed, ProbeTimeout

DEFAULT_TIMEOUT: Final[float] = 5.0

# Retries for exec races such as ETXTBSY right after smartctl is upgraded
SPAWN_RETRIES: Final[int] = 2
SPAWN_BACKOFF: Final[float] = 0.1
_TRANSIENT_ERRNOS: Final = frozenset({errno.ETXTBSY, errno.EAGAIN})

# smartctl(8) EXIT STATUS bits
EXIT_STATUS_BITS: Final[dict[int, str]] = {
    0: "command line did not parse",
    1: "device open failed or device is in a low-power mode",
    2: "SMART or ATA command failed, or checksum error",
    3: "SMART status check returned DISK FAILING",
    4: "prefail attributes at or below threshold",
    5: "usage attributes were at or below threshold in the past",
    6: "device error log contains records of errors",
    7: "device self-test log contains records of errors",
}


@dataclass(frozen=True)
class ProbeResult:
    """Captured output of one smartctl invocation."""
    device: str
    args: tuple[str, ...]
    stdout: str
    stderr: str
    returncode: int
    elapsed: float

    def exit_flags(self) -> list[str]:
        """Describe the bits set in smartctl's exit status."""
        return [
            description for bit, description in EXIT_STATUS_BITS.items()
            if self.returncode & (1 << bit)
        ]

    def diagnostic(self) -> str:
        """Best human-readable explanation of a failed probe.

        smartctl prints most device errors on stdout, so fall back to the
        last stdout line when stderr is empty.
        """
        for stream in (self.stderr, self.stdout):
            lines = [line.strip() for line in stream.splitlines()
                     if line.strip()]
            if lines:
                return lines[-1]
        flags = self.exit_flags()
        if flags:
            return f"exit status {self.returncode}: {'; '.join(flags)}"
        return f"exit status {self.returncode}"


def build_command(device: str, smartctl: str = "smartctl",
                  device_type: str | None = None,
                  skip_standby: bool = False) -> list[str]:
    """Build the smartctl argv for an identity + attribute query."""
    command = [smartctl, "-i", "-A"]
    if skip_standby:
        command += ["-n", "standby"]
    if device_type:
        command += ["-d", device_type]
    command.append(device)
    return command


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def probe(device: str, *, smartctl: str = "smartctl",
          timeout: float = DEFAULT_TIMEOUT,
          device_type: str | None = None,
          skip_standby: bool = False) -> ProbeResult:
    """Run smartctl for one device and capture its output.

    Args:
        device: Device path (e.g., /dev/sda)
        smartctl: smartctl executable name or path
        timeout: Seconds to wait before killing smartctl
        device_type: Optional ``-d`` argument (ata, sat, scsi, nvme, ...)
        skip_standby: Pass ``-n standby`` so sleeping drives are not spun up

    Returns:
        ProbeResult, whatever the exit status

    Raises:
        ProbeTimeout: smartctl ran longer than ``timeout``
        ProbeSpawnFailed: smartctl is missing or cannot be executed
    """
    command = build_command(device, smartctl, device_type, skip_standby)
    logger.debug(f"Running: {' '.join(command)}")

    attempt = 0
    while True:
        start = time.monotonic()
        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=timeout,
                check=False
            )
            break
        except subprocess.TimeoutExpired:
            logger.warning(f"smartctl timed out after {timeout}s for {device}")
            raise ProbeTimeout(device, timeout) from None
        except FileNotFoundError as e:
            raise ProbeSpawnFailed(smartctl, "command not found") from e
        except PermissionError as e:
            raise ProbeSpawnFailed(smartctl, "permission denied") from e
        except OSError as e:
            if e.errno in _TRANSIENT_ERRNOS and attempt < SPAWN_RETRIES:
                attempt += 1
                logger.debug(f"Transient spawn error for {smartctl} "
                             f"({e.strerror}), retry {attempt}")
                time.sleep(SPAWN_BACKOFF * attempt)
                continue
            raise ProbeSpawnFailed(smartctl, e.strerror or str(e)) from e

    elapsed = time.monotonic() - start
    probe_result = ProbeResult(
        device=device,
        args=tuple(command),
        stdout=_decode(result.stdout),
        stderr=_decode(result.stderr),
        returncode=result.returncode,
        elapsed=elapsed,
    )
    if result.returncode != 0:
        logger.debug(f"smartctl exit {result.returncode} for {device}: "
                     f"{probe_result.exit_flags()}")
    logger.debug(f"Probed {device} in {elapsed:.2f}s")
    return probe_result
