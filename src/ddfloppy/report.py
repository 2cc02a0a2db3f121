"""
Terminal report for a parsed mapfile.

Renders the mapfile metadata, per-status totals and a compact track map
(one glyph per sector, colored by status) using rich.
"""

from datetime import datetime
from typing import Optional

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from ddfloppy.core.mapfile import BlockStatus, MapFile
from ddfloppy.core.settings import StatusColors


STATUS_GLYPHS = {
    BlockStatus.NON_TRIED: "·",
    BlockStatus.NON_TRIMMED: "*",
    BlockStatus.NON_SCRAPED: "/",
    BlockStatus.BAD_SECTOR: "X",
    BlockStatus.FINISHED: "█",
}


def _format_time(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S")


def build_info_table(map_file: MapFile) -> Table:
    """Build the mapfile metadata table."""
    floppy = map_file.floppy_type

    table = Table(title="Mapfile", show_header=False, title_justify="left")
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")

    table.add_row("Floppy type", floppy.name)
    table.add_row(
        "Geometry",
        f"{floppy.sides} sides, {floppy.tracks} tracks, "
        f"{floppy.sectors} sectors/track, {floppy.sector_size} bytes/sector"
    )
    table.add_row("Status", map_file.status.label)
    table.add_row("Pass", str(map_file.pass_num))
    table.add_row("Current position", f"{map_file.current_pos:#010x}")
    table.add_row("Start time", _format_time(map_file.start_time))
    table.add_row("Current time", _format_time(map_file.current_time))
    table.add_row("Total size", f"{map_file.total_size:,} bytes")
    table.add_row("Blocks", str(len(map_file.blocks)))
    return table


def build_status_table(map_file: MapFile, colors: StatusColors) -> Table:
    """Build the table of sector and byte totals per status."""
    sector_counts = map_file.status_counts()
    byte_counts = map_file.bytes_by_status()
    total_sectors = sum(sector_counts.values())

    table = Table(title="Sectors", title_justify="left")
    table.add_column("", justify="center")
    table.add_column("Status")
    table.add_column("Sectors", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("%", justify="right")

    for status in BlockStatus:
        count = sector_counts[status]
        percent = 100.0 * count / total_sectors if total_sectors else 0.0
        table.add_row(
            Text(STATUS_GLYPHS[status], style=colors.color_for(status)),
            status.label,
            f"{count:,}",
            f"{byte_counts[status]:,}",
            f"{percent:.1f}",
        )
    return table


def build_track_map(map_file: MapFile, colors: StatusColors) -> Text:
    """
    Build a track map with one line per track.

    Example output (no colors)::

        S0 T00 ██████████XX██████
        S0 T01 ████··············
    """
    text = Text()

    for sector in map_file.sectors():
        if sector.sector == 1:
            if sector.index:
                text.append("\n")
            text.append(f"S{sector.side} T{sector.track:02d} ", style="dim")
        text.append(STATUS_GLYPHS[sector.status], style=colors.color_for(sector.status))

    return text


def build_legend(colors: StatusColors) -> Text:
    """Build the glyph legend line."""
    legend = Text("Legend: ", style="dim")
    for status in BlockStatus:
        legend.append(STATUS_GLYPHS[status], style=colors.color_for(status))
        legend.append(f" {status.label}  ")
    return legend


def render_report(map_file: MapFile,
                  console: Optional[Console] = None,
                  colors: Optional[StatusColors] = None) -> None:
    """
    Print the full report for a mapfile.

    Args:
        map_file: Parsed mapfile
        console: Console to print to (default: a new stdout console)
        colors: Status colors (default: StatusColors())
    """
    console = console or Console()
    colors = colors or StatusColors()

    console.print(Group(
        build_info_table(map_file),
        Text(),
        build_status_table(map_file, colors),
        Text(),
        build_track_map(map_file, colors),
        Text(),
        build_legend(colors),
    ))
