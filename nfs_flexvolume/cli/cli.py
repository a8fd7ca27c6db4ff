#!/usr/bin/env python3
"""
Main CLI entry point using Typer.

The kubelet runs the driver as `<driver> <operation> [args...]` and reads one
JSON object from its output. The exit status is always 0; failures are
reported through the "status" field.
"""

import logging
import sys
from typing import List, Optional

import typer

from nfs_flexvolume.cli.commands import driver
from nfs_flexvolume.cli.lib.config import load_config
from nfs_flexvolume.cli.lib.log import setup_logging
from nfs_flexvolume.models import DriverResult

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="nfs-flexvolume",
    help="NFS FlexVolume driver",
    add_completion=False,
)

# Register driver operations
app.command("init")(driver.init_command)
app.command("mount")(driver.mount_command)
app.command("unmount")(driver.unmount_command)

SUPPORTED_OPERATIONS = ("init", "mount", "unmount")


def _usage_message(e: Exception) -> Optional[str]:
    # Typer's usage errors (click's, or its vendored copy in newer releases) render via format_message().
    format_message = getattr(e, "format_message", None)
    return format_message() if callable(format_message) else None


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        setup_logging(load_config())

        if not args or args[0] not in SUPPORTED_OPERATIONS:
            operation = args[0] if args else ""
            logger.info("Operation %s is not supported", operation)
            driver.emit(DriverResult.not_supported(operation))
            return 0

        app(args=args, prog_name="nfs-flexvolume", standalone_mode=False)
    except Exception as e:
        usage = _usage_message(e)
        if usage is not None:
            logger.error("Invalid invocation %s: %s", args, usage)
            driver.emit(DriverResult.failure(usage))
        else:
            logger.exception("Unhandled error during %s", args[0] if args else "")
            driver.emit(DriverResult.failure(f"Unexpected error: {e}"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
