"""
Mapfile text builders for testing.

Provides helpers that produce ddrescue mapfile text in the layout written
by ddrescue itself, so tests do not depend on files checked into the repo.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ddfloppy.core import FloppyType, find_by_name


FLOPPY_360K = find_by_name('5¼" 360K')
FLOPPY_720K = find_by_name('3½" 720K')
FLOPPY_1_44M = find_by_name('3½" 1.44M')


def build_mapfile(blocks: Sequence[Tuple[int, int, str]],
                  status: str = "+",
                  current_pos: int = 0,
                  pass_num: int = 1,
                  start_time: Optional[str] = "2024-01-15 10:30:00",
                  current_time: Optional[str] = "2024-01-15 10:32:41") -> str:
    """
    Build mapfile text.

    Args:
        blocks: (pos, size, status) tuples
        status: Status line code
        current_pos: Status line position
        pass_num: Status line pass number
        start_time: Value for the "# Start time:" comment, None to omit
        current_time: Value for the "# Current time:" comment, None to omit

    Returns:
        Mapfile text without a trailing newline
    """
    lines = ["# Mapfile. Created by GNU ddrescue version 1.27",
             "# Command line: ddrescue -d /dev/fd0 floppy.img floppy.map"]
    if start_time is not None:
        lines.append(f"# Start time:   {start_time}")
    if current_time is not None:
        lines.append(f"# Current time: {current_time}")
    lines.append("# current_pos  current_status  current_pass")
    lines.append(f"0x{current_pos:08X}     {status}               {pass_num}")
    lines.append("#      pos        size  status")
    for pos, size, block_status in blocks:
        lines.append(f"0x{pos:08X}  0x{size:08X}  {block_status}")
    return "\n".join(lines)


def single_block(floppy: FloppyType, status: str = "+") -> List[Tuple[int, int, str]]:
    """One block covering the whole disk."""
    return [(0, floppy.total_size, status)]


def split_blocks(total_size: int, *cuts: Tuple[int, str],
                 first_status: str = "+") -> List[Tuple[int, int, str]]:
    """
    Split ``[0, total_size)`` into consecutive blocks.

    Each cut is ``(offset, status)`` and starts a new block with that
    status at ``offset``.

    Example:
        >>> split_blocks(1024, (512, "-"))
        [(0, 512, '+'), (512, 512, '-')]
    """
    starts = [(0, first_status)] + list(cuts)
    blocks = []
    for i, (pos, status) in enumerate(starts):
        end = starts[i + 1][0] if i + 1 < len(starts) else total_size
        blocks.append((pos, end - pos, status))
    return blocks


def write_mapfile(directory: Path, text: str, name: str = "floppy.map") -> Path:
    """Write mapfile text to ``directory`` and return its path."""
    path = Path(directory) / name
    path.write_text(text + "\n", encoding="utf-8")
    return path
