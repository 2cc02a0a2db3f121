"""
ddfloppy - view ddrescue progress as a floppy disk.

Reads the mapfile written by GNU ddrescue while imaging a floppy disk and
maps its byte ranges onto sides, tracks and sectors, so the state of every
physical sector can be reported or drawn.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from ddfloppy.core import (
    FloppyType,
    list_floppy_types,
    find_by_total_size,
    find_by_name,
    MapFile,
    Block,
    Status,
    BlockStatus,
    Sector,
    load_mapfile,
    MapFileError,
)

__all__ = [
    "__version__",

    # Floppy types
    "FloppyType",
    "list_floppy_types",
    "find_by_total_size",
    "find_by_name",

    # Mapfile
    "MapFile",
    "Block",
    "Status",
    "BlockStatus",
    "Sector",
    "load_mapfile",
    "MapFileError",
]
