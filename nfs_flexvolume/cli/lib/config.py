"""
Configuration loader for the NFS FlexVolume driver.

The driver is executed once per request by the kubelet, so all settings come
from a small INI file (and a couple of environment overrides) read on every
invocation. Missing files are not an error.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


DEFAULT_CONFIG_PATH = Path("/etc/nfs-flexvolume/driver.conf")
DEFAULT_MOUNT_ROOT = "/mnt/nfsflexvolume"


@dataclass(frozen=True)
class DriverConfig:
    mount_root: str = DEFAULT_MOUNT_ROOT
    fstype: str = "nfs4"
    mount_dir_mode: int = 0o755
    lock_path: Optional[Path] = None  # None disables the node-local mount lock
    log_file: Optional[Path] = None
    log_level: str = "INFO"


def _config_path() -> Path:
    env = os.environ.get("NFS_FLEXVOLUME_CONFIG_PATH")
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    if path.exists():
        try:
            parser.read(path, encoding="utf-8")
        except configparser.Error:
            # Unparsable file: fall back to defaults
            return configparser.ConfigParser(interpolation=None)
    return parser


def load_config() -> DriverConfig:
    """
    Load config from `NFS_FLEXVOLUME_CONFIG_PATH` or `/etc/nfs-flexvolume/driver.conf`.

    `NFS_FLEXVOLUME_MOUNT_ROOT` overrides `mount_root` from the file. Missing or
    unparsable files yield defaults.
    """
    parser = _read_ini(_config_path())
    section = parser["driver"] if parser.has_section("driver") else {}

    def _get(key: str, default: str) -> str:
        if isinstance(section, dict):
            return str(section.get(key, default)).strip()
        return str(section.get(key, fallback=default)).strip()

    def _get_mode(key: str, default: int) -> int:
        raw = _get(key, oct(default))
        try:
            return int(raw, 8)
        except ValueError:
            return default

    def _get_path(key: str) -> Optional[Path]:
        raw = _get(key, "")
        return Path(raw) if raw else None

    mount_root = os.environ.get("NFS_FLEXVOLUME_MOUNT_ROOT") or _get("mount_root", DEFAULT_MOUNT_ROOT)

    return DriverConfig(
        mount_root=mount_root.rstrip("/") or "/",
        fstype=_get("fstype", "nfs4"),
        mount_dir_mode=_get_mode("mount_dir_mode", 0o755),
        lock_path=_get_path("lock_path"),
        log_file=_get_path("log_file"),
        log_level=_get("log_level", "INFO").upper(),
    )
