"""
Logging configuration for ddfloppy.

Provides file based logging with system information capture for debugging
and troubleshooting.
"""

import logging
import sys
import platform
from pathlib import Path
from typing import Optional, Union


_console_handler: Optional[logging.Handler] = None


def setup_logging(log_file: Union[str, Path] = "ddfloppy.log",
                  level: int = logging.DEBUG,
                  console_level: int = logging.WARNING) -> None:
    """
    Configure logging for the application.

    Sets up file-based logging and a console handler on stderr, then
    records system information for troubleshooting purposes.

    Args:
        log_file: Path to log file (default: "ddfloppy.log")
        level: File logging level (default: logging.DEBUG)
        console_level: Console logging level (default: logging.WARNING)

    Example:
        >>> setup_logging()
        >>> logging.info("Application started")
    """
    global _console_handler

    # Create logs directory if it doesn't exist
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        filename=str(log_path),
        level=level,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console output goes to stderr so that reports on stdout stay clean
    root = logging.getLogger()
    if _console_handler is not None:
        root.removeHandler(_console_handler)
    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setLevel(console_level)
    _console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
    root.addHandler(_console_handler)

    log_system_info()


def log_system_info() -> None:
    """Log platform and interpreter details."""
    from ddfloppy import __version__

    logging.info("=" * 60)
    logging.info(f"ddfloppy {__version__} - System Information")
    logging.info("=" * 60)
    logging.info(f"Platform: {platform.system()} {platform.release()}")
    logging.info(f"Machine: {platform.machine()}")
    logging.info(f"Python version: {sys.version}")
    logging.info(f"Python executable: {sys.executable}")
    logging.info("=" * 60)


def log_mapfile_info(map_file, level: int = logging.INFO) -> None:
    """
    Log a summary of a parsed mapfile.

    Args:
        map_file: MapFile object
        level: Logging level (default: logging.INFO)

    Example:
        >>> log_mapfile_info(load_mapfile("disk.map"))
    """
    floppy = map_file.floppy_type
    logging.log(level, f"Floppy type: {floppy.name}")
    logging.log(
        level,
        f"Geometry: {floppy.sides} sides/{floppy.tracks} tracks/"
        f"{floppy.sectors} sectors ({floppy.sector_size} bytes/sector)"
    )
    logging.log(
        level,
        f"Status: {map_file.status.label}, pass {map_file.pass_num}, "
        f"position {map_file.current_pos:#x}"
    )
    logging.log(
        level,
        f"Blocks: {len(map_file.blocks)} ({map_file.total_size} bytes, "
        f"{map_file.total_sectors} sectors)"
    )
