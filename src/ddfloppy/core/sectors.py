"""
Mapping of mapfile blocks onto physical floppy sectors.

A mapfile describes the disk as a flat sequence of byte ranges. Sectors are
numbered linearly side by side: all tracks of side 0 first, then all tracks
of side 1. SectorIterator walks that linear space one sector at a time and
reports the side, track and 1-based sector number of each position
together with the status of the block covering it.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ddfloppy.core.mapfile import BlockStatus, MapFile


@dataclass(frozen=True)
class Sector:
    """
    A physical sector derived from a mapfile.

    Attributes:
        pos: Byte offset of the sector on the disk
        index: Linear sector number (0-based)
        side: Disk side (0-based)
        track: Track on that side (0-based)
        sector: Sector within the track (1-based, as on the disk)
        status: Status of the block covering the sector
    """
    pos: int
    index: int
    side: int
    track: int
    sector: int
    status: "BlockStatus"

    @property
    def chs(self) -> str:
        """Formatted side/track/sector address."""
        return f"{self.side}/{self.track}/{self.sector}"


class SectorIterator:
    """
    Iterator over all sectors of a MapFile in linear order.

    Each call to ``MapFile.sectors()`` creates a new, independent iterator.
    The iterator only keeps a block index and the current position, the
    mapfile itself is never modified.

    ``len()`` returns the exact number of sectors still to come.

    Example:
        >>> for sector in map_file.sectors():
        ...     print(sector.chs, sector.status)
        0/0/1 BlockStatus.FINISHED
        0/0/2 BlockStatus.FINISHED
        ...
    """

    def __init__(self, map_file: "MapFile"):
        self._blocks = map_file.blocks
        self._sector_size = map_file.floppy_type.sector_size
        self._sectors_per_track = map_file.floppy_type.sectors
        self._tracks = map_file.floppy_type.tracks
        self._total_sectors = (
            (map_file.total_size + self._sector_size - 1) // self._sector_size
        )

        self._block = 0
        self._index = 0
        self._side = 0
        self._track = 0
        self._sector = 0

    def __iter__(self) -> "SectorIterator":
        return self

    def __next__(self) -> Sector:
        while self._block < len(self._blocks):
            block = self._blocks[self._block]
            pos = self._index * self._sector_size

            # Blocks are only ever passed forwards
            if not block.contains(pos):
                self._block += 1
                continue

            sector = Sector(
                pos=pos,
                index=self._index,
                side=self._side,
                track=self._track,
                sector=self._sector + 1,
                status=block.status,
            )

            self._sector += 1
            if self._sector == self._sectors_per_track:
                self._sector = 0
                self._track += 1

                if self._track == self._tracks:
                    self._track = 0
                    self._side += 1

            self._index += 1
            return sector

        raise StopIteration

    def __len__(self) -> int:
        remaining = self._total_sectors - self._index
        assert remaining >= 0, "sector index past end of disk"
        return remaining

    def __length_hint__(self) -> int:
        return len(self)
