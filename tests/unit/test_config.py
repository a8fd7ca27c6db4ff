"""
Unit tests for config loader.
"""

from pathlib import Path

import pytest

from nfs_flexvolume.cli.lib.config import load_config


@pytest.mark.unit
def test_load_config_missing_file(monkeypatch, temp_dir):
    monkeypatch.setenv("NFS_FLEXVOLUME_CONFIG_PATH", str(temp_dir / "missing.conf"))

    cfg = load_config()
    assert cfg.mount_root == "/mnt/nfsflexvolume"
    assert cfg.fstype == "nfs4"
    assert cfg.mount_dir_mode == 0o755
    assert cfg.lock_path is None
    assert cfg.log_file is None


@pytest.mark.unit
def test_load_config_reads_values(monkeypatch, temp_dir):
    config_path = temp_dir / "driver.conf"
    config_path.write_text(
        "\n".join(
            [
                "[driver]",
                "mount_root = /srv/nfs/",
                "fstype = nfs",
                "mount_dir_mode = 0750",
                "lock_path = /run/nfs-flexvolume/locks",
                "log_file = /var/log/nfs-flexvolume.log",
                "log_level = debug",
                "",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("NFS_FLEXVOLUME_CONFIG_PATH", str(config_path))

    cfg = load_config()
    assert cfg.mount_root == "/srv/nfs"
    assert cfg.fstype == "nfs"
    assert cfg.mount_dir_mode == 0o750
    assert cfg.lock_path == Path("/run/nfs-flexvolume/locks")
    assert cfg.log_file == Path("/var/log/nfs-flexvolume.log")
    assert cfg.log_level == "DEBUG"


@pytest.mark.unit
def test_load_config_invalid_mode_falls_back(monkeypatch, temp_dir):
    config_path = temp_dir / "driver.conf"
    config_path.write_text("[driver]\nmount_dir_mode = rwx\n", encoding="utf-8")
    monkeypatch.setenv("NFS_FLEXVOLUME_CONFIG_PATH", str(config_path))

    assert load_config().mount_dir_mode == 0o755


@pytest.mark.unit
def test_mount_root_env_override(monkeypatch, temp_dir):
    config_path = temp_dir / "driver.conf"
    config_path.write_text("[driver]\nmount_root = /srv/nfs\n", encoding="utf-8")
    monkeypatch.setenv("NFS_FLEXVOLUME_CONFIG_PATH", str(config_path))
    monkeypatch.setenv("NFS_FLEXVOLUME_MOUNT_ROOT", str(temp_dir / "mnt"))

    assert load_config().mount_root == str(temp_dir / "mnt")


@pytest.mark.unit
def test_load_config_without_section_header(monkeypatch, temp_dir):
    config_path = temp_dir / "driver.conf"
    config_path.write_text("mount_root = /mnt/x\n", encoding="utf-8")
    monkeypatch.setenv("NFS_FLEXVOLUME_CONFIG_PATH", str(config_path))

    cfg = load_config()
    assert cfg.mount_root == "/mnt/nfsflexvolume"
    assert cfg.fstype == "nfs4"


@pytest.mark.unit
def test_load_config_percent_in_value(monkeypatch, temp_dir):
    config_path = temp_dir / "driver.conf"
    config_path.write_text("[driver]\nlog_file = /var/log/nfs-%h.log\n", encoding="utf-8")
    monkeypatch.setenv("NFS_FLEXVOLUME_CONFIG_PATH", str(config_path))

    assert load_config().log_file == Path("/var/log/nfs-%h.log")
