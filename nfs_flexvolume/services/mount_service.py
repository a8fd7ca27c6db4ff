"""
Mount service layer.

Runs the per-request pipeline: derive the canonical mount point, make sure
the share is mounted there, prepare the sub-directory and publish it at the
target. The first failing stage ends the request; retries are the kubelet's
job and are safe because every stage re-checks its precondition.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from nfs_flexvolume.cli.lib.config import DriverConfig, load_config
from nfs_flexvolume.cli.lib.nfs import ensure_mounted
from nfs_flexvolume.cli.lib.paths import mount_path
from nfs_flexvolume.cli.lib.publish import publish, remove_target
from nfs_flexvolume.cli.lib.subpath import ensure_sub_path
from nfs_flexvolume.exceptions import FlexVolumeError, InvalidVolumeSource
from nfs_flexvolume.models import DriverResult, VolumeSource

logger = logging.getLogger(__name__)


def _format_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def parse_volume_source(options_json: str) -> VolumeSource:
    """
    Decode the kubelet's JSON options into a VolumeSource.

    Raises:
        InvalidVolumeSource: If the JSON is malformed or a field is invalid
    """
    try:
        return VolumeSource.model_validate_json(options_json)
    except ValidationError as e:
        raise InvalidVolumeSource(f"Invalid mount options: {_format_validation_error(e)}")


def init() -> DriverResult:
    return DriverResult.initialized()


def mount(target: str, options_json: str, config: Optional[DriverConfig] = None) -> DriverResult:
    """
    Mount the share described by options_json and publish it at target.

    Args:
        target: Path the kubelet expects the volume at
        options_json: JSON object with share, mountOptions, subPath,
            createIfNecessary and createMode
        config: Driver configuration (loaded if omitted)

    Returns:
        Success, or Failure carrying the first error's message
    """
    cfg = config or load_config()
    try:
        source = parse_volume_source(options_json)
        options = source.sorted_mount_options
        mount_point = mount_path(cfg.mount_root, source.share, options)
        logger.info("Mounting %s (%s) for %s via %s", source.share, options, target, mount_point)

        ensure_mounted(source.share, mount_point, options, cfg)
        src = ensure_sub_path(
            mount_point,
            source.sub_path,
            create=source.create_if_necessary,
            mode=source.create_mode if source.create_mode is not None else cfg.mount_dir_mode,
        )
        publish(src, target)
    except FlexVolumeError as e:
        logger.error("Mount of %s failed: %s", target, e.message)
        return DriverResult.failure(e.message)

    return DriverResult.success("Mount completed!")


def unmount(target: str) -> DriverResult:
    """
    Remove the link published at target.

    The shared NFS mount stays in place for other pods. A missing target is
    a failure.
    """
    try:
        remove_target(target)
    except FlexVolumeError as e:
        logger.error("Unmount of %s failed: %s", target, e.message)
        return DriverResult.failure(e.message)

    logger.info("Unmounted %s", target)
    return DriverResult.success("Successfully unmounted")
