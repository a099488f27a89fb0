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
# smart-hddtemp/src/smart_hddtemp/parser.py

"""Parse smartctl text output into temperature readings.

Everything here is a pure function of the captured text, so it can be
tested against fixture strings without a drive or smartctl installed.
"""

import re
from dataclasses import dataclass
from typing import Final

from .errors import AttributeNotFound, MalformedValue

# SMART attribute IDs that carry a temperature on ATA drives
ATTR_TEMPERATURE_CELSIUS: Final[int] = 194
ATTR_AIRFLOW_TEMPERATURE: Final[int] = 190

# Column holding RAW_VALUE in the standard and `-f brief` attribute tables
RAW_COLUMN_STANDARD: Final[int] = 9
RAW_COLUMN_BRIEF: Final[int] = 7

_INTEGER = re.compile(r'^[+-]?\d+$')
_NVME_TEMPERATURE = re.compile(r'^Temperature:\s+(\S+)\s+Celsius')
_SCSI_TEMPERATURE = re.compile(r'^Current Drive Temperature:\s+(\S+)')


@dataclass(frozen=True)
class Reading:
    """A temperature reported by one device."""
    device: str
    temperature: int
    source: str  # attribute that produced the value
    line: int  # 1-based line number in the smartctl output
    unit: str = 'C'
    vendor: str | None = None
    model: str | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            'device': self.device,
            'status': 'ok',
            'temperature': self.temperature,
            'unit': self.unit,
            'source': self.source,
            'line': self.line,
            'vendor': self.vendor,
            'model': self.model,
        }


def _attribute_value(fields: list[str], attr_id: int) -> str | None:
    """Return the raw value token of an attribute table row, if it is one.

    Standard layout:
        ID# ATTRIBUTE_NAME FLAG VALUE WORST THRESH TYPE UPDATED WHEN_FAILED RAW_VALUE
    Brief layout (``-f brief``):
        ID# ATTRIBUTE_NAME FLAGS VALUE WORST THRESH FAIL RAW_VALUE

    Returns '' for a matching row that is too short to hold a raw value.
    """
    if len(fields) < 2 or fields[0] != str(attr_id):
        return None
    if len(fields) > 2 and not fields[2].lower().startswith('0x'):
        column = RAW_COLUMN_BRIEF
    else:
        column = RAW_COLUMN_STANDARD
    return fields[column] if len(fields) > column else ''


def _match_attribute(attr_id: int):
    def match(line: str) -> tuple[str, str] | None:
        fields = line.split()
        value = _attribute_value(fields, attr_id)
        if value is None:
            return None
        return f"{attr_id} {fields[1]}", value
    return match


def _match_pattern(pattern: re.Pattern, source: str):
    def match(line: str) -> tuple[str, str] | None:
        m = pattern.match(line.strip())
        if m is None:
            return None
        return source, m.group(1)
    return match


# Highest priority first. Within one source the first matching line wins.
TEMPERATURE_SOURCES: Final = (
    _match_attribute(ATTR_TEMPERATURE_CELSIUS),
    _match_attribute(ATTR_AIRFLOW_TEMPERATURE),
    _match_pattern(_NVME_TEMPERATURE, 'NVMe Temperature'),
    _match_pattern(_SCSI_TEMPERATURE, 'SCSI Current Drive Temperature'),
)


def parse_identity(raw_text: str) -> tuple[str | None, str | None]:
    """Extract (vendor, model) from the ``smartctl -i`` section.

    The vendor is the first word of "Model Family" when present (SATA
    drives), otherwise the SCSI "Vendor" field.
    """
    fields = {}
    for line in raw_text.splitlines():
        key, sep, value = line.partition(':')
        if sep and value.strip():
            fields.setdefault(key.strip(), value.strip())

    vendor = None
    family = fields.get('Model Family')
    if family:
        vendor = family.split()[0]
    elif fields.get('Vendor'):
        vendor = fields['Vendor']

    model = (fields.get('Device Model') or fields.get('Model Number') or
             fields.get('Product'))
    return vendor, model


def parse(raw_text: str, device: str = "") -> Reading:
    """Parse smartctl output into a Reading.

    Args:
        raw_text: Captured stdout of ``smartctl -i -A``
        device: Device path the output belongs to

    Returns:
        Reading with the temperature exactly as smartctl reported it

    Raises:
        AttributeNotFound: no line reports a temperature
        MalformedValue: the matching line's value is not an integer
    """
    lines = raw_text.splitlines()
    for source in TEMPERATURE_SOURCES:
        for lineno, line in enumerate(lines, start=1):
            matched = source(line)
            if matched is None:
                continue

            name, value = matched
            if not _INTEGER.match(value):
                raise MalformedValue(
                    device,
                    f"line {lineno}: {name} value {value!r} is not an integer"
                )
            vendor, model = parse_identity(raw_text)
            return Reading(
                device=device,
                temperature=int(value),
                source=name,
                line=lineno,
                vendor=vendor,
                model=model,
            )

    if not raw_text.strip():
        raise AttributeNotFound(device, "smartctl produced no output")
    raise AttributeNotFound(device, "no temperature attribute in smartctl output")
