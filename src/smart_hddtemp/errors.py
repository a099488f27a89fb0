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
# smart-hddtemp/src/smart_hddtemp/errors.py

"""Error taxonomy for temperature probing.

Fatal errors (``NoDevicesFound``, ``ProbeSpawnFailed``) abort a run.
``ProbeError`` and its subclasses describe a single device and are recorded
in the report next to the successful readings.
"""


class SmartTempError(Exception):
    """Base class for all smart-hddtemp errors."""


class NoDevicesFound(SmartTempError):
    """No devices were given and discovery found none."""


class ProbeSpawnFailed(SmartTempError):
    """smartctl could not be located or launched."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"cannot run {command}: {reason}")


class ProbeError(SmartTempError):
    """A per-device failure carried in the report."""

    def __init__(self, device: str, detail: str):
        self.device = device
        self.detail = detail
        super().__init__(f"{device}: {detail}" if device else detail)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self.device, self.detail) == (other.device, other.detail)

    def __hash__(self):
        return hash((type(self), self.device, self.detail))

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'device': self.device,
            'status': 'error',
            'error': self.kind,
            'detail': self.detail,
        }


class ProbeTimeout(ProbeError):
    """smartctl did not finish before its timeout and was killed."""

    def __init__(self, device: str, timeout: float):
        self.timeout = timeout
        super().__init__(device, f"smartctl timed out after {timeout:g}s")

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (self.device, self.timeout) == (other.device, other.timeout)

    def __hash__(self):
        return hash((type(self), self.device, self.timeout))


class ProbeExitNonZero(ProbeError):
    """smartctl exited non-zero and its output held no temperature."""

    def __init__(self, device: str, returncode: int, detail: str):
        self.returncode = returncode
        super().__init__(device, detail)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return ((self.device, self.returncode, self.detail) ==
                (other.device, other.returncode, other.detail))

    def __hash__(self):
        return hash((type(self), self.device, self.returncode, self.detail))

    def to_dict(self) -> dict:
        data = super().to_dict()
        data['returncode'] = self.returncode
        return data


class ParseError(ProbeError):
    """smartctl output could not be turned into a reading."""


class AttributeNotFound(ParseError):
    """No line reports a temperature."""


class MalformedValue(ParseError):
    """A temperature line was found but its value is not an integer."""
