"""
Known floppy disk geometries.

A ddrescue mapfile only records byte ranges, so the physical layout of the
disk has to come from somewhere else. This module holds a fixed table of
common PC floppy formats which can be looked up by their exact total size
in bytes.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


# All supported formats use 512 byte sectors
SECTOR_SIZE = 512


# =============================================================================
# Floppy Type Data Class
# =============================================================================


@dataclass(frozen=True)
class FloppyType:
    """
    Physical layout of a floppy disk format.

    Attributes:
        name: Display label (e.g. '3½" 1.44M')
        sides: Number of sides (1 or 2)
        tracks: Tracks per side
        sectors: Sectors per track
        sector_size: Sector size in bytes

    Calculated Attributes:
        total_size: Capacity in bytes (sides * tracks * sectors * sector_size)

    Example:
        >>> floppy = FloppyType('3½" 720K', sides=2, tracks=80, sectors=9)
        >>> floppy.total_size
        737280
    """
    name: str
    sides: int
    tracks: int
    sectors: int
    sector_size: int = SECTOR_SIZE
    total_size: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, 'total_size',
            self.sides * self.tracks * self.sectors * self.sector_size
        )

    @property
    def total_sectors(self) -> int:
        """Total number of sectors on the disk."""
        return self.sides * self.tracks * self.sectors

    def __str__(self) -> str:
        return (
            f"{self.name} "
            f"({self.sides}S/{self.tracks}T/{self.sectors}S, "
            f"{self.sector_size}B/sec, {self.total_size:,} bytes)"
        )


# =============================================================================
# Registry
# =============================================================================


FLOPPY_TYPES: Tuple[FloppyType, ...] = (
    FloppyType('5¼" 160K', 1, 40, 8),
    FloppyType('5¼" 320K', 2, 40, 8),
    FloppyType('5¼" 180K', 1, 40, 9),
    FloppyType('5¼" 360K', 2, 40, 9),
    FloppyType('5¼" 1.2M', 2, 80, 15),

    FloppyType('3½" 720K', 2, 80, 9),
    FloppyType('3½" 1.44M', 2, 80, 18),
    FloppyType('3½" 1.72M', 2, 80, 21),
    FloppyType('3½" 2.88M', 2, 80, 36),
)


def list_floppy_types() -> Tuple[FloppyType, ...]:
    """Return every known floppy type in registry order."""
    return FLOPPY_TYPES


def find_by_total_size(total_size: int) -> Optional[FloppyType]:
    """
    Find the floppy type whose capacity is exactly ``total_size`` bytes.

    Args:
        total_size: Disk size in bytes

    Returns:
        Matching FloppyType, or None if no format has that size

    Example:
        >>> find_by_total_size(368640).name
        '5¼" 360K'
        >>> find_by_total_size(1000) is None
        True
    """
    for floppy in FLOPPY_TYPES:
        if floppy.total_size == total_size:
            return floppy
    return None


def _normalize_name(name: str) -> str:
    name = name.strip().lower()
    name = name.replace('5.25"', '5¼"').replace('3.5"', '3½"')
    return name


def find_by_name(name: str) -> Optional[FloppyType]:
    """
    Find a floppy type by its display name.

    Matching ignores case and surrounding whitespace, and accepts the
    ASCII spellings 5.25" and 3.5" for the size prefix.

    Example:
        >>> find_by_name('3.5" 1.44m').total_size
        1474560
    """
    wanted = _normalize_name(name)
    for floppy in FLOPPY_TYPES:
        if _normalize_name(floppy.name) == wanted:
            return floppy
    return None
