"""
Logging setup for driver invocations.

The kubelet parses the driver's combined stdout/stderr as JSON, so log
records go to a file or nowhere.
"""

import logging

from nfs_flexvolume.cli.lib.config import DriverConfig

LOG_FORMAT = "%(asctime)s %(process)d %(levelname)s %(name)s: %(message)s"


def setup_logging(config: DriverConfig) -> None:
    root = logging.getLogger("nfs_flexvolume")
    root.propagate = False
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()

    handler: logging.Handler = logging.NullHandler()
    if config.log_file:
        try:
            config.log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(config.log_file, encoding="utf-8")
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
        except OSError:
            handler = logging.NullHandler()

    root.addHandler(handler)
    level = logging.getLevelName(config.log_level)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
