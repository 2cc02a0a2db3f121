"""
Utility functions for ddfloppy.
"""

from ddfloppy.utils.logging import (
    setup_logging,
    log_system_info,
    log_mapfile_info,
)

__all__ = [
    "setup_logging",
    "log_system_info",
    "log_mapfile_info",
]
