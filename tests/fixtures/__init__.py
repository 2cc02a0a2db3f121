"""
Test fixtures for ddfloppy.

Provides mapfile builders for testing without real ddrescue output.
"""

from tests.fixtures.mapfiles import (
    FLOPPY_360K,
    FLOPPY_720K,
    FLOPPY_1_44M,
    build_mapfile,
    single_block,
    split_blocks,
    write_mapfile,
)

__all__ = [
    "FLOPPY_360K",
    "FLOPPY_720K",
    "FLOPPY_1_44M",
    "build_mapfile",
    "single_block",
    "split_blocks",
    "write_mapfile",
]
