"""
Main entry point for ddfloppy.

Loads a ddrescue mapfile and either prints a terminal report
(``--summary``) or opens the PyQt6 viewer.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ddfloppy import __version__
from ddfloppy.core.floppy_types import find_by_name, list_floppy_types
from ddfloppy.core.mapfile import MapFile, MapFileError, load_mapfile
from ddfloppy.core.settings import Settings
from ddfloppy.report import render_report
from ddfloppy.utils import setup_logging, log_mapfile_info

logger = logging.getLogger(__name__)


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="ddfloppy",
        description="Show the progress of a ddrescue floppy image as a disk map.",
    )
    parser.add_argument("mapfile", nargs="?", help="ddrescue mapfile to load")
    parser.add_argument(
        "-t", "--type", dest="floppy_type", metavar="NAME",
        help='floppy type to use instead of detecting it from the size, e.g. \'3.5" 1.44M\'',
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="reject mapfiles whose blocks leave gaps or overlap",
    )
    parser.add_argument(
        "-s", "--summary", action="store_true",
        help="print a text report instead of opening the viewer",
    )
    parser.add_argument(
        "--list-types", action="store_true",
        help="list the known floppy types and exit",
    )
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, type=str.upper,
        help="log file level (default from settings)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_floppy_types(console: Console) -> None:
    """Print the floppy type registry as a table."""
    table = Table(title="Known floppy types", title_justify="left")
    table.add_column("Name")
    table.add_column("Sides", justify="right")
    table.add_column("Tracks", justify="right")
    table.add_column("Sectors", justify="right")
    table.add_column("Size", justify="right")

    for floppy in list_floppy_types():
        table.add_row(
            floppy.name,
            str(floppy.sides),
            str(floppy.tracks),
            str(floppy.sectors),
            f"{floppy.total_size:,}",
        )
    console.print(table)


def run_gui(map_file: MapFile, settings: Settings, mapfile_path: str) -> int:
    """Open the viewer window and run the Qt event loop."""
    from PyQt6.QtWidgets import QApplication
    from ddfloppy.gui import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName("ddfloppy")
    app.setApplicationVersion(__version__)

    window = MainWindow(map_file, settings=settings, mapfile_path=mapfile_path)
    window.show()

    return app.exec()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for ddfloppy.

    Returns:
        Process exit code (0 success, 1 mapfile error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.list_types:
        print_floppy_types(console)
        return 0

    if not args.mapfile:
        parser.error("the mapfile argument is required")

    floppy_type = None
    if args.floppy_type:
        floppy_type = find_by_name(args.floppy_type)
        if floppy_type is None:
            parser.error(f"unknown floppy type: {args.floppy_type} (see --list-types)")

    settings = Settings.instance()
    level = settings.logging.get_log_level()
    if args.log_level:
        level = logging.getLevelName(args.log_level)
    setup_logging(settings.logging.get_log_file(), level=level)

    try:
        map_file = load_mapfile(args.mapfile, floppy_type=floppy_type, strict=args.strict)
    except MapFileError as e:
        logger.error(f"Cannot load mapfile: {e}")
        return 1

    log_mapfile_info(map_file)

    if args.summary:
        render_report(map_file, console=console, colors=settings.display.colors)
        return 0

    return run_gui(map_file, settings, args.mapfile)


if __name__ == "__main__":
    sys.exit(main())
