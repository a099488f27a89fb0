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
# smart-hddtemp/tests/test_devices.py

import pytest

from smart_hddtemp import NoDevicesFound, discover_devices, enumerate_devices
from smart_hddtemp.devices import normalize_device


def make_sys_block(root, physical, virtual=()):
    """Build a fake /sys/block with backed and unbacked entries."""
    sys_block = root / "sys" / "block"
    for name in physical:
        (sys_block / name / "device").mkdir(parents=True)
    for name in virtual:
        (sys_block / name).mkdir(parents=True)
    return sys_block


class TestDiscovery:
    """Test filesystem discovery of block devices."""

    def test_sysfs(self, tmp_path):
        """Test physical disks are found and virtual ones skipped."""
        sys_block = make_sys_block(
            tmp_path,
            physical=["sdb", "sda", "nvme0n1", "loop0", "zd0", "sr0"],
            virtual=["dm-0", "md127"],
        )

        devices = discover_devices(sys_block, tmp_path / "dev")

        assert devices == [
            str(tmp_path / "dev" / "nvme0n1"),
            str(tmp_path / "dev" / "sda"),
            str(tmp_path / "dev" / "sdb"),
        ]

    def test_unbacked_entry_skipped(self, tmp_path):
        """Test entries without a device link are ignored."""
        sys_block = make_sys_block(tmp_path, physical=["sda"],
                                   virtual=["xvda"])
        assert discover_devices(sys_block, tmp_path / "dev") == [
            str(tmp_path / "dev" / "sda")
        ]

    def test_dev_fallback(self, tmp_path):
        """Test whole-disk nodes are found when /sys/block is absent."""
        dev = tmp_path / "dev"
        dev.mkdir()
        for name in ["ada0", "ada0p1", "da1", "nvme0", "nvd0", "null"]:
            (dev / name).touch()

        devices = discover_devices(tmp_path / "missing", dev)

        assert devices == [
            str(dev / "ada0"), str(dev / "da1"), str(dev / "nvme0")
        ]

    def test_nothing_to_scan(self, tmp_path):
        assert discover_devices(tmp_path / "a", tmp_path / "b") == []


class TestEnumeration:
    """Test choosing between explicit devices and discovery."""

    def test_explicit_skips_discovery(self):
        """Test an explicit list is used as given, in order."""
        def discover():
            raise AssertionError("discovery should not run")

        devices = enumerate_devices(["/dev/sdc", "sda", "/dev/sdb"],
                                    discover=discover)
        assert devices == ["/dev/sdc", "/dev/sda", "/dev/sdb"]

    def test_explicit_duplicates_removed(self):
        """Test each device is probed once, first occurrence kept."""
        devices = enumerate_devices(["sdb", "/dev/sda", "/dev/sdb", " "])
        assert devices == ["/dev/sdb", "/dev/sda"]

    def test_discovery_used_when_empty(self):
        devices = enumerate_devices([], discover=lambda: ["/dev/sda"])
        assert devices == ["/dev/sda"]

    def test_no_devices(self):
        """Test NoDevicesFound when nothing is given or discovered."""
        with pytest.raises(NoDevicesFound):
            enumerate_devices(None, discover=lambda: [])

    def test_normalize(self):
        assert normalize_device("sda") == "/dev/sda"
        assert normalize_device("/dev/disk/by-id/ata-X") == (
            "/dev/disk/by-id/ata-X"
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
