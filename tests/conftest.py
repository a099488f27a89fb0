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
# smart-hddtemp/tests/conftest.py

import importlib
import subprocess

import pytest

# The package re-exports the probe() function under the same name, so
# smart_hddtemp.probe resolves to the function, not the module.
probe_module = importlib.import_module("smart_hddtemp.probe")

# smartctl -i -A output of a SATA drive
ATA_OUTPUT = """smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0] (local build)
Copyright (C) 2002-22, Bruce Allen, Christian Franke, www.smartmontools.org

=== START OF INFORMATION SECTION ===
Model Family:     Western Digital Red
Device Model:     WDC WD40EFRX-68N32N0
Serial Number:    WD-WCC7K0ABCDEF
User Capacity:    4,000,787,030,016 bytes [4.00 TB]
SMART support is: Enabled

=== START OF READ SMART DATA SECTION ===
SMART Attributes Data Structure revision number: 16
Vendor Specific SMART Attributes with Thresholds:
ID# ATTRIBUTE_NAME          FLAG     VALUE WORST THRESH TYPE      UPDATED  WHEN_FAILED RAW_VALUE
  1 Raw_Read_Error_Rate     0x002f   200   200   051    Pre-fail  Always       -       0
  9 Power_On_Hours          0x0032   051   051   000    Old_age   Always       -       35887
190 Airflow_Temperature_Cel 0x0022   066   055   045    Old_age   Always       -       36
194 Temperature_Celsius     0x0022   118   109   000    Old_age   Always       -       34
197 Current_Pending_Sector  0x0032   200   200   000    Old_age   Always       -       0
"""

# smartctl -i -A output of an NVMe drive
NVME_OUTPUT = """smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0] (local build)

=== START OF INFORMATION SECTION ===
Model Number:                       Samsung SSD 970 EVO Plus 1TB
Serial Number:                      S4EWNX0R123456

=== START OF SMART DATA SECTION ===
SMART/Health Information (NVMe Log 0x02)
Critical Warning:                   0x00
Temperature:                        41 Celsius
Available Spare:                    100%
Temperature Sensor 1:               41 Celsius
Temperature Sensor 2:               45 Celsius
"""

# smartctl -i -A output of a SAS drive
SCSI_OUTPUT = """=== START OF INFORMATION SECTION ===
Vendor:               SEAGATE
Product:              ST4000NM0023
Revision:             0004

=== START OF READ SMART DATA SECTION ===
Current Drive Temperature:     29 C
Drive Trip Temperature:        60 C
"""

# smartctl writes open failures to stdout and exits with bit 1 set
OPEN_FAILED_OUTPUT = """smartctl 7.3 2022-02-28 r5338 [x86_64-linux-6.1.0] (local build)
Copyright (C) 2002-22, Bruce Allen, Christian Franke, www.smartmontools.org

Smartctl open device: /dev/sdz failed: No such device
"""


class FakeSmartctl:
    """Stand-in for subprocess.run that answers per device path."""

    def __init__(self, responses: dict[str, tuple[int, str, str]]):
        self.responses = responses
        self.calls: list[list[str]] = []

    def __call__(self, command, **kwargs):
        self.calls.append(list(command))
        device = command[-1]
        response = self.responses[device]
        if isinstance(response, BaseException):
            raise response
        returncode, stdout, stderr = response
        return subprocess.CompletedProcess(
            command, returncode,
            stdout=stdout.encode(), stderr=stderr.encode()
        )


@pytest.fixture
def fake_smartctl(monkeypatch):
    """Install a FakeSmartctl; call with a {device: response} mapping."""
    def install(responses):
        fake = FakeSmartctl(responses)
        monkeypatch.setattr(probe_module.subprocess, "run", fake)
        return fake
    return install
