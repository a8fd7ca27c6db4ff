"""
NFS FlexVolume - shared NFS mounts published into pod volume directories.

This package provides the driver executable invoked by the kubelet's
FlexVolume plugin manager to mount NFS shares and expose them as symlinks.
"""

__version__ = "0.1.0"
__all__ = ["cli", "services"]
