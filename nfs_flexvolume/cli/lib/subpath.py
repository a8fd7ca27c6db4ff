"""
Sub-directory management inside a mounted share.
"""

import logging
import os
from typing import List

from nfs_flexvolume.cli.lib.paths import source_path
from nfs_flexvolume.exceptions import SubPathError

logger = logging.getLogger(__name__)


def _missing_dirs(path: str) -> List[str]:
    missing: List[str] = []
    current = path
    while current and not os.path.lexists(current):
        missing.append(current)
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return list(reversed(missing))


def ensure_sub_path(mount_point: str, sub_path: str, create: bool, mode: int = 0o755) -> str:
    """
    Create or verify the directory that will be published.

    Directories created here get exactly `mode`, regardless of the umask.

    Args:
        mount_point: Canonical mount point
        sub_path: Relative directory inside the share ("" for the share root)
        create: Create the directory (and parents) if absent
        mode: Permission mode for created directories

    Returns:
        Resolved source path

    Raises:
        SubPathError: If the directory cannot be created, or is absent and
            create is False
    """
    path = source_path(mount_point, sub_path)

    if create:
        try:
            created = _missing_dirs(path)
            os.makedirs(path, mode=mode, exist_ok=True)
            for directory in created:
                os.chmod(directory, mode)
        except OSError as e:
            raise SubPathError(f"Could not create subPath {path}: {e}")
        if created:
            logger.info("Created %s with mode %s", path, oct(mode))
        return path

    try:
        os.stat(path)
    except OSError as e:
        raise SubPathError(f"Could not find path {path} to be mounted: {e}")
    return path
