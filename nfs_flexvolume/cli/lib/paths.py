"""
Canonical mount point derivation.

Every request for the same share and the same set of mount options resolves
to one directory under the mount root, so pods sharing a share also share a
single NFS mount.
"""

import os

from nfs_flexvolume.exceptions import InvalidVolumeSource


def sort_mount_options(options: str) -> str:
    """
    Return the comma separated options in a canonical order.

    Args:
        options: Comma separated mount options (e.g., "ro,nfsvers=4")

    Returns:
        Sorted options (e.g., "nfsvers=4,ro"); empty tokens are dropped
    """
    tokens = [t.strip() for t in options.split(",") if t.strip()]
    return ",".join(sorted(tokens))


def mount_path(root: str, share: str, options: str) -> str:
    """
    Derive the canonical mount point for a share and its options.

    The share is used verbatim; callers must supply path-safe identifiers.

    Args:
        root: Mount root directory (e.g., "/mnt/nfsflexvolume")
        share: Remote export (e.g., "nfs.example.com:/export")
        options: Comma separated mount options, in any order

    Returns:
        "<root>/<share>/options/<sorted options>"
    """
    return f"{root.rstrip('/')}/{share}/options/{sort_mount_options(options)}"


def source_path(mount_point: str, sub_path: str) -> str:
    """
    Resolve the directory inside the mount that gets published.

    Raises:
        InvalidVolumeSource: If sub_path would leave the mount point
    """
    if not sub_path:
        return mount_point

    resolved = os.path.normpath(os.path.join(mount_point, sub_path))
    base = os.path.normpath(mount_point)
    if os.path.isabs(sub_path) or os.path.commonpath([base, resolved]) != base:
        raise InvalidVolumeSource(f"subPath {sub_path} escapes mount point {mount_point}")
    return resolved
