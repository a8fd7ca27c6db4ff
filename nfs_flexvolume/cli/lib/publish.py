"""
Target link management.
"""

import logging
import os

from nfs_flexvolume.exceptions import PublishError

logger = logging.getLogger(__name__)


def remove_target(target: str, missing_ok: bool = False) -> None:
    """
    Remove the entry at a target path.

    Files and symlinks are unlinked; an empty directory (the kubelet creates
    the target as one) is removed with rmdir. Nothing is removed recursively.

    Args:
        target: Target path
        missing_ok: Do not fail if the target does not exist

    Raises:
        PublishError: If the target cannot be removed
    """
    try:
        if os.path.isdir(target) and not os.path.islink(target):
            os.rmdir(target)
        else:
            os.unlink(target)
    except FileNotFoundError as e:
        if missing_ok:
            return
        raise PublishError(f"Could not remove target {target}: {e}")
    except OSError as e:
        raise PublishError(f"Could not remove target {target}: {e}")

    logger.debug("Removed %s", target)


def publish(source: str, target: str) -> None:
    """
    Replace the target with a symlink to the source directory.

    Args:
        source: Resolved directory inside the mount
        target: Target path owned by the caller

    Raises:
        PublishError: If the target cannot be removed or linked
    """
    remove_target(target, missing_ok=True)

    try:
        os.symlink(source, target)
    except OSError as e:
        raise PublishError(f"Could not symlink {source} to {target}: {e}")

    logger.info("Published %s at %s", source, target)
