"""
NFS mount management functions.
"""

import contextlib
import errno
import logging
import os
import subprocess
from typing import Iterator, List, Optional

from oslo_concurrency import lockutils

from nfs_flexvolume.cli.lib.config import DriverConfig
from nfs_flexvolume.exceptions import MountError, UnmountError

logger = logging.getLogger(__name__)

LOCK_FILE_PREFIX = "nfs-flexvolume-"


def _run(cmd: List[str]) -> subprocess.CompletedProcess:
    # stderr is folded into stdout so failures can be reported verbatim.
    logger.debug("Running %s", " ".join(cmd))
    return subprocess.run(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        check=False
    )


def is_stale_mount(path: str) -> bool:
    """
    Check if a path is an NFS mount whose server no longer knows this client.

    Only ESTALE counts; any other stat error (including a missing path)
    is not staleness.

    Args:
        path: Mount point directory

    Returns:
        True if stat reports a stale file handle, False otherwise
    """
    try:
        os.stat(path)
    except OSError as e:
        return e.errno == errno.ESTALE
    return False


def is_mountpoint(path: str) -> bool:
    """
    Check if a path is an active mount point.

    A failing or missing `mountpoint` tool is reported as "not mounted",
    so the worst case is a redundant mount attempt.

    Args:
        path: Directory to check

    Returns:
        True if mounted, False otherwise
    """
    try:
        result = _run(["mountpoint", "-q", path])
    except OSError as e:
        logger.warning("Could not run mountpoint for %s: %s", path, e)
        return False

    return result.returncode == 0


def mount_nfs(share: str, mount_point: str, options: str, fstype: str = "nfs4") -> None:
    """
    Mount an NFS share.

    Args:
        share: Remote export (e.g., "nfs.example.com:/export")
        mount_point: Mount point directory
        options: Sorted comma separated mount options (may be empty)
        fstype: Filesystem type passed to `mount -t`

    Raises:
        MountError: If mounting fails
    """
    cmd = ["mount", "-t", fstype, share, mount_point]
    if options:
        cmd.extend(["-o", options])

    try:
        result = _run(cmd)
    except OSError as e:
        raise MountError(f"Could not mount {share} at {mount_point}: {e}")

    if result.returncode == 0:
        logger.info("Mounted %s at %s", share, mount_point)
        return

    output = result.stdout or ""
    if "already mounted" in output.lower():
        # Another invocation for the same share and options won the race.
        logger.warning("%s is already mounted at %s: %s", share, mount_point, output.strip())
        return

    raise MountError(f"Could not mount {share} at {mount_point}: {output}", output=output)


def umount(mount_point: str) -> None:
    """
    Unmount a mount point.

    Args:
        mount_point: Mount point directory

    Raises:
        UnmountError: If unmounting fails
    """
    try:
        result = _run(["umount", mount_point])
    except OSError as e:
        raise UnmountError(f"Could not unmount {mount_point}: {e}")

    if result.returncode != 0:
        output = result.stdout or ""
        raise UnmountError(f"Could not unmount {mount_point}: {output}", output=output)

    logger.info("Unmounted %s", mount_point)


@contextlib.contextmanager
def _mount_lock(mount_point: str, lock_path: Optional[str]) -> Iterator[None]:
    if not lock_path:
        yield
        return

    with lockutils.lock(mount_point, lock_file_prefix=LOCK_FILE_PREFIX, external=True, lock_path=lock_path):
        yield


def ensure_mounted(share: str, mount_point: str, options: str, config: DriverConfig) -> None:
    """
    Make sure the canonical mount point is backed by a live NFS mount.

    A stale mount is unmounted first; failing to do so is fatal. A live
    mount is left untouched, so repeated calls run no mount commands.

    Args:
        share: Remote export
        mount_point: Canonical mount point
        options: Sorted comma separated mount options
        config: Driver configuration

    Raises:
        UnmountError: If a stale mount cannot be unmounted
        MountError: If the mount point cannot be created or mounted
    """
    lock_path = str(config.lock_path) if config.lock_path else None

    with _mount_lock(mount_point, lock_path):
        if is_stale_mount(mount_point):
            logger.warning("Stale NFS mount at %s, unmounting", mount_point)
            try:
                umount(mount_point)
            except UnmountError as e:
                detail = e.output or e.message
                raise UnmountError(f"Could not unmount stale mount {mount_point}: {detail}", output=e.output)

        if is_mountpoint(mount_point):
            logger.debug("%s is already mounted", mount_point)
            return

        try:
            os.makedirs(mount_point, mode=config.mount_dir_mode, exist_ok=True)
        except OSError as e:
            raise MountError(f"Could not make mount point {mount_point}: {e}")

        mount_nfs(share, mount_point, options, fstype=config.fstype)
