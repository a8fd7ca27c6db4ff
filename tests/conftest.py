"""
Pytest configuration and fixtures.
"""

import logging
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from nfs_flexvolume.cli.lib.config import DriverConfig


class FakeMountTools:
    """Stand-in for the mountpoint, mount and umount commands."""

    def __init__(self, mount_rc=0, umount_rc=0, output=""):
        self.mounted = set()
        self.mount_rc = mount_rc
        self.umount_rc = umount_rc
        self.output = output
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        tool = cmd[0]
        if tool == "mountpoint":
            return MagicMock(returncode=0 if cmd[-1] in self.mounted else 1, stdout="")
        if tool == "mount":
            if self.mount_rc == 0:
                self.mounted.add(cmd[4])
            return MagicMock(returncode=self.mount_rc, stdout=self.output)
        if tool == "umount":
            if self.umount_rc == 0:
                self.mounted.discard(cmd[1])
            return MagicMock(returncode=self.umount_rc, stdout=self.output)
        raise AssertionError(f"unexpected command {cmd}")

    def count(self, tool):
        return len([c for c in self.calls if c[0] == tool])


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from /etc/nfs-flexvolume and restore driver logging."""
    monkeypatch.setenv("NFS_FLEXVOLUME_CONFIG_PATH", str(tmp_path / "missing-driver.conf"))
    monkeypatch.delenv("NFS_FLEXVOLUME_MOUNT_ROOT", raising=False)
    yield
    logger = logging.getLogger("nfs_flexvolume")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def driver_config(temp_dir):
    """Driver configuration rooted in the temporary directory."""
    return DriverConfig(mount_root=str(temp_dir / "mnt"))


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for testing."""
    with patch("subprocess.run") as mock:
        yield mock


@pytest.fixture
def fake_mount_tools():
    """Route subprocess.run to a FakeMountTools instance."""
    tools = FakeMountTools()
    with patch("subprocess.run", side_effect=tools):
        yield tools
