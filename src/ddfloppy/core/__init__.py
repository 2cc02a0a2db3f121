"""
Core functionality for ddfloppy.

This module provides the floppy geometry registry, the ddrescue mapfile
parser and the mapping of mapfile blocks onto physical sectors.
"""

from ddfloppy.core.floppy_types import (
    FloppyType,
    FLOPPY_TYPES,
    SECTOR_SIZE,
    list_floppy_types,
    find_by_total_size,
    find_by_name,
)

from ddfloppy.core.sectors import (
    Sector,
    SectorIterator,
)

from ddfloppy.core.mapfile import (
    # Model
    MapFile,
    Block,
    Status,
    BlockStatus,

    # Loading
    load_mapfile,
    parse_number,
    parse_timestamp,

    # Errors
    MapFileError,
    NoStatusLineError,
    UnknownFloppyTypeError,
    InvalidLineError,
    MapFileCoverageError,
    MapFileIOError,
)

__all__ = [
    # Floppy types
    "FloppyType",
    "FLOPPY_TYPES",
    "SECTOR_SIZE",
    "list_floppy_types",
    "find_by_total_size",
    "find_by_name",

    # Sectors
    "Sector",
    "SectorIterator",

    # Mapfile
    "MapFile",
    "Block",
    "Status",
    "BlockStatus",
    "load_mapfile",
    "parse_number",
    "parse_timestamp",

    # Errors
    "MapFileError",
    "NoStatusLineError",
    "UnknownFloppyTypeError",
    "InvalidLineError",
    "MapFileCoverageError",
    "MapFileIOError",
]
