"""
ddrescue mapfile parsing.

ddrescue keeps track of its progress in a plain text "mapfile". The file
starts with optional comment lines, followed by a status line describing
the current operation and then one line per contiguous block of the
rescue domain:

    # Mapfile. Created by GNU ddrescue version 1.27
    # Start time:   2024-01-15 10:30:00
    # Current time: 2024-01-15 10:32:41
    # current_pos  current_status  current_pass
    0x00058000     +               1
    #      pos        size  status
    0x00000000  0x00058000  +
    0x00058000  0x00000200  -
    0x00058200  0x00007E00  +

This module turns such a file into an immutable MapFile model. The model
is tied to a FloppyType so that every block can be mapped onto physical
sides, tracks and sectors (see ddfloppy.core.sectors).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from ddfloppy.core.floppy_types import FloppyType, find_by_total_size
from ddfloppy.core.sectors import SectorIterator

logger = logging.getLogger(__name__)


COMMENT_START_TIME = "# Start time:"
COMMENT_CURRENT_TIME = "# Current time:"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Mapfile positions and sizes are unsigned 64-bit values
MAX_NUMBER = 2 ** 64 - 1

_DIGITS = {
    8: frozenset("01234567"),
    10: frozenset("0123456789"),
    16: frozenset("0123456789abcdefABCDEF"),
}


# =============================================================================
# Custom Exceptions
# =============================================================================

class MapFileError(Exception):
    """Base exception for all mapfile errors."""

    def __init__(self, message: str, filepath: Optional[str] = None):
        self.message = message
        self.filepath = filepath
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.filepath:
            return f"{self.message} [File: {self.filepath}]"
        return self.message


class NoStatusLineError(MapFileError):
    """Raised when the mapfile contains no status line."""

    def __init__(self, message: str = "Mapfile has no status line",
                 filepath: Optional[str] = None):
        super().__init__(message, filepath)


class UnknownFloppyTypeError(MapFileError):
    """Raised when no floppy geometry matches the mapfile."""

    def __init__(self, message: str = "Unknown floppy type",
                 filepath: Optional[str] = None,
                 total_size: Optional[int] = None):
        self.total_size = total_size
        super().__init__(message, filepath)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.total_size is not None:
            return f"{base} [Size: {self.total_size}]"
        return base


class InvalidLineError(MapFileError):
    """Raised when a non-comment line cannot be parsed."""

    def __init__(self, line_number: int, message: str = "Invalid line",
                 filepath: Optional[str] = None):
        self.line_number = line_number
        super().__init__(message, filepath)

    def _format_message(self) -> str:
        return f"{super()._format_message()} [Line: {self.line_number}]"


class MapFileCoverageError(InvalidLineError):
    """Raised in strict mode when blocks leave a gap or overlap."""

    def __init__(self, line_number: int,
                 message: str = "Block does not follow the previous block",
                 filepath: Optional[str] = None):
        super().__init__(line_number, message, filepath)


class MapFileIOError(MapFileError):
    """Raised when the underlying line source fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 filepath: Optional[str] = None):
        self.cause = cause
        super().__init__(message, filepath)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.cause is not None:
            return f"{base}: {self.cause}"
        return base


# =============================================================================
# Enums
# =============================================================================

class Status(Enum):
    """Current ddrescue operation, taken from the status line."""
    COPYING_NON_TRIED_BLOCKS = "?"
    TRIMMING_NON_TRIMMED_BLOCKS = "*"
    SCRAPING_NON_SCRAPED_BLOCKS = "/"
    RETRYING_BAD_SECTORS = "-"
    FILLING_SPECIFIED_BLOCKS = "F"
    GENERATING_APPROXIMATE_MAPFILE = "G"
    FINISHED = "+"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()


class BlockStatus(Enum):
    """Status of a single block, and of every sector inside it."""
    NON_TRIED = "?"
    NON_TRIMMED = "*"
    NON_SCRAPED = "/"
    BAD_SECTOR = "-"
    FINISHED = "+"

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class Block:
    """
    One contiguous byte range of the rescue domain.

    Attributes:
        pos: Starting byte offset
        size: Length in bytes
        status: Status shared by every byte in the range
    """
    pos: int
    size: int
    status: BlockStatus

    @property
    def end(self) -> int:
        """Offset of the first byte after the block."""
        return self.pos + self.size

    def contains(self, offset: int) -> bool:
        """Check whether ``offset`` lies inside the block."""
        return self.pos <= offset < self.end


# =============================================================================
# Line Parsing Helpers
# =============================================================================

def parse_number(token: str, line_number: int) -> int:
    """
    Parse a numeric mapfile field.

    ddrescue writes positions as hexadecimal, but accepts the C conventions
    when reading: ``0x`` prefix for hexadecimal, a leading ``0`` for octal
    and decimal otherwise.

    Args:
        token: Field text
        line_number: 1-based line number, used for error reporting

    Returns:
        Parsed non-negative integer

    Raises:
        InvalidLineError: If the token is not a valid number

    Example:
        >>> parse_number("0x1A", 1), parse_number("010", 1), parse_number("10", 1)
        (26, 8, 10)
    """
    if token.startswith("0x"):
        digits, radix = token[2:], 16
    elif token.startswith("0") and len(token) > 1:
        digits, radix = token[1:], 8
    else:
        digits, radix = token, 10

    if not digits or not set(digits) <= _DIGITS[radix]:
        raise InvalidLineError(line_number, f"Invalid number '{token}'")

    value = int(digits, radix)
    if value > MAX_NUMBER:
        raise InvalidLineError(line_number, f"Number out of range '{token}'")
    return value


def parse_timestamp(text: str) -> Optional[datetime]:
    """
    Parse a mapfile comment timestamp as local time.

    Returns:
        Timezone-aware datetime in the local zone, or None if ``text`` does
        not match ``YYYY-MM-DD HH:MM:SS``
    """
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT).astimezone()
    except ValueError:
        return None


def _numbered_lines(lines: Iterable[Union[str, bytes]]) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, text) pairs, wrapping read failures."""
    iterator = iter(lines)
    line_number = 0

    while True:
        try:
            line = next(iterator)
            if isinstance(line, bytes):
                line = line.decode("utf-8")
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            raise MapFileIOError(f"Failed to read line {line_number + 1}", cause=e) from e

        line_number += 1
        yield line_number, line


def _parse_status_line(parts, line_number: int) -> Tuple[int, Status, int]:
    current_pos = parse_number(parts[0], line_number)
    try:
        status = Status(parts[1])
    except ValueError:
        raise InvalidLineError(line_number, f"Invalid status '{parts[1]}'") from None
    pass_num = parse_number(parts[2], line_number)
    return current_pos, status, pass_num


def _parse_block_line(parts, line_number: int) -> Block:
    pos = parse_number(parts[0], line_number)
    size = parse_number(parts[1], line_number)
    try:
        status = BlockStatus(parts[2])
    except ValueError:
        raise InvalidLineError(line_number, f"Invalid block status '{parts[2]}'") from None
    return Block(pos=pos, size=size, status=status)


# =============================================================================
# Map File Model
# =============================================================================

@dataclass(frozen=True)
class MapFile:
    """
    Parsed ddrescue mapfile.

    Instances are created by :meth:`load` (or :func:`load_mapfile`) and are
    read-only afterwards. ``total_size`` is always the sum of the block
    sizes.

    Attributes:
        start_time: "# Start time:" comment value, if present and valid
        current_time: "# Current time:" comment value, if present and valid
        current_pos: Position from the status line
        status: Operation from the status line
        pass_num: Pass number from the status line
        total_size: Sum of all block sizes
        blocks: Blocks in file order
        floppy_type: Geometry used to map blocks onto sectors
    """
    start_time: Optional[datetime]
    current_time: Optional[datetime]
    current_pos: int
    status: Status
    pass_num: int
    total_size: int
    blocks: Tuple[Block, ...]
    floppy_type: FloppyType

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))
        block_total = sum(block.size for block in self.blocks)
        if block_total != self.total_size:
            raise ValueError(
                f"total_size {self.total_size} does not match "
                f"sum of block sizes {block_total}"
            )

    @classmethod
    def load(cls, lines: Iterable[Union[str, bytes]],
             floppy_type: Optional[FloppyType] = None,
             strict: bool = False) -> "MapFile":
        """
        Parse mapfile lines.

        Args:
            lines: Any iterable of lines, such as an open text file
            floppy_type: Explicit geometry. If None, the geometry is looked
                up by the total size of all blocks.
            strict: Also require blocks to start at 0 and follow each other
                without gaps or overlaps

        Returns:
            Fully populated MapFile

        Raises:
            InvalidLineError: A non-comment line is malformed
            MapFileCoverageError: Blocks do not tile the domain (strict only)
            NoStatusLineError: No status line was found
            UnknownFloppyTypeError: No geometry could be resolved
            MapFileIOError: Reading from ``lines`` failed

        Example:
            >>> with open("disk.map") as f:
            ...     map_file = MapFile.load(f)
            >>> map_file.floppy_type.name
            '3½" 1.44M'
        """
        start_time: Optional[datetime] = None
        current_time: Optional[datetime] = None
        status_line: Optional[Tuple[int, Status, int]] = None
        total_size = 0
        blocks = []
        line_count = 0

        for line_number, line in _numbered_lines(lines):
            line_count = line_number
            line = line.strip()

            if line.startswith("#"):
                # Only the first occurrence of each timestamp comment counts
                if start_time is None and line.startswith(COMMENT_START_TIME):
                    start_time = _comment_timestamp(line, COMMENT_START_TIME, line_number)
                if current_time is None and line.startswith(COMMENT_CURRENT_TIME):
                    current_time = _comment_timestamp(line, COMMENT_CURRENT_TIME, line_number)
                continue

            parts = line.split()
            if len(parts) != 3:
                raise InvalidLineError(
                    line_number, f"Expected 3 fields, found {len(parts)}"
                )

            if status_line is None:
                status_line = _parse_status_line(parts, line_number)
                continue

            block = _parse_block_line(parts, line_number)
            if strict:
                expected_pos = blocks[-1].end if blocks else 0
                if block.pos != expected_pos:
                    raise MapFileCoverageError(
                        line_number,
                        f"Block starts at {block.pos:#x}, expected {expected_pos:#x}"
                    )

            blocks.append(block)
            total_size += block.size

        logger.debug(f"Read {line_count} lines, {len(blocks)} blocks, {total_size} bytes")

        if status_line is None:
            raise NoStatusLineError()

        if floppy_type is None:
            floppy_type = find_by_total_size(total_size)
            if floppy_type is None:
                raise UnknownFloppyTypeError(total_size=total_size)
        logger.debug(f"Using floppy type {floppy_type.name}")

        current_pos, status, pass_num = status_line
        return cls(
            start_time=start_time,
            current_time=current_time,
            current_pos=current_pos,
            status=status,
            pass_num=pass_num,
            total_size=total_size,
            blocks=tuple(blocks),
            floppy_type=floppy_type,
        )

    def sectors(self) -> SectorIterator:
        """Return a fresh iterator over every physical sector."""
        return SectorIterator(self)

    @property
    def total_sectors(self) -> int:
        """Number of sectors the iterator reports for this mapfile."""
        sector_size = self.floppy_type.sector_size
        return (self.total_size + sector_size - 1) // sector_size

    def status_counts(self) -> Dict[BlockStatus, int]:
        """Count sectors per status."""
        counts = {status: 0 for status in BlockStatus}
        for sector in self.sectors():
            counts[sector.status] += 1
        return counts

    def bytes_by_status(self) -> Dict[BlockStatus, int]:
        """Sum block sizes per status."""
        totals = {status: 0 for status in BlockStatus}
        for block in self.blocks:
            totals[block.status] += block.size
        return totals


def _comment_timestamp(line: str, prefix: str, line_number: int) -> Optional[datetime]:
    value = line[len(prefix):].strip()
    timestamp = parse_timestamp(value)
    if timestamp is None:
        logger.warning(f"Ignoring invalid timestamp on line {line_number}: '{value}'")
    return timestamp


def load_mapfile(path: Union[str, Path],
                 floppy_type: Optional[FloppyType] = None,
                 strict: bool = False) -> MapFile:
    """
    Open and parse a mapfile from disk.

    Errors raised while parsing carry the file path.

    Raises:
        MapFileError: See :meth:`MapFile.load`; failure to open the file is
            reported as MapFileIOError
    """
    path = Path(path)
    logger.info(f"Loading mapfile {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            return MapFile.load(f, floppy_type=floppy_type, strict=strict)
    except MapFileError as e:
        e.filepath = str(path)
        e.args = (e._format_message(),)
        raise
    except OSError as e:
        raise MapFileIOError("Failed to open mapfile", cause=e, filepath=str(path)) from e
