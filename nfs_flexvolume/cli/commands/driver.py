"""
FlexVolume driver commands.
"""

from typing import List

import typer

from nfs_flexvolume.models import DriverResult
from nfs_flexvolume.services import mount_service


def emit(result: DriverResult) -> None:
    """Write the result object the kubelet parses."""
    typer.echo(result.to_json())


def init_command():
    """
    Initialize the driver.

    Reports that no attach/detach phase is needed.
    """
    emit(mount_service.init())


def mount_command(
    args: List[str] = typer.Argument(..., help="Target directory, then the JSON options object (last argument)"),
):
    """
    Mount an NFS share and publish it at the target directory.
    """
    if len(args) < 2:
        emit(DriverResult.failure("mount requires a target directory and a JSON options object"))
        return

    emit(mount_service.mount(args[0], args[-1]))


def unmount_command(
    target: str = typer.Argument(..., help="Target directory"),
):
    """
    Remove the link published at the target directory.
    """
    emit(mount_service.unmount(target))
