#!/usr/bin/env python3
"""
Entry point for the nfs-flexvolume driver.
"""

import sys

from nfs_flexvolume.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
