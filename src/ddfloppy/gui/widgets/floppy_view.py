"""
Circular view of one side of a floppy disk.

Tracks are drawn as concentric rings with track 0 on the outside, and every
track is split into equal wedges, one per sector, starting at 12 o'clock
and running clockwise. Each wedge is filled with the color of its sector
status. Non-tried sectors are not drawn individually, they show the disk
background instead.
"""

import logging
from typing import Dict, Optional

from PyQt6.QtWidgets import (
    QGraphicsView,
    QGraphicsScene,
    QGraphicsPathItem,
    QGraphicsLineItem,
)
from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import (
    QPainter,
    QPainterPath,
    QColor,
    QPen,
    QBrush,
)

from ddfloppy.core.mapfile import BlockStatus, MapFile
from ddfloppy.core.sectors import Sector
from ddfloppy.core.settings import StatusColors

logger = logging.getLogger(__name__)


def create_wedge_path(inner_radius: float, outer_radius: float,
                      start_angle: float, span_angle: float) -> QPainterPath:
    """
    Build the outline of a ring segment centered on the origin.

    Angles are in degrees using Qt's convention (counter-clockwise from
    3 o'clock); a negative span runs clockwise.
    """
    outer_rect = QRectF(-outer_radius, -outer_radius, outer_radius * 2, outer_radius * 2)
    inner_rect = QRectF(-inner_radius, -inner_radius, inner_radius * 2, inner_radius * 2)

    path = QPainterPath()
    path.arcMoveTo(outer_rect, start_angle)
    path.arcTo(outer_rect, start_angle, span_angle)
    path.arcTo(inner_rect, start_angle + span_angle, -span_angle)
    path.closeSubpath()
    return path


class SectorWedgeItem(QGraphicsPathItem):
    """
    Graphical representation of a single sector.

    The tooltip shows the sector address, byte offset and status.
    """

    def __init__(self, sector: Sector, inner_radius: float, outer_radius: float,
                 start_angle: float, span_angle: float, color: QColor):
        super().__init__(create_wedge_path(inner_radius, outer_radius, start_angle, span_angle))
        self.sector = sector

        self.setPen(QPen(Qt.PenStyle.NoPen))
        self.setBrush(QBrush(color))
        self.setToolTip(
            f"Side {sector.side}, Track {sector.track}, Sector {sector.sector}\n"
            f"Offset: {sector.pos:#x}\n"
            f"Status: {sector.status.label}"
        )


class FloppyView(QGraphicsView):
    """
    Circular sector map for one side of a MapFile.

    Example:
        >>> view = FloppyView(side=0)
        >>> view.set_map_file(map_file)
    """

    OUTER_RADIUS = 200.0
    TRACK_RADIUS = OUTER_RADIUS * 0.1   # Where the innermost track ends
    HUB_RADIUS = OUTER_RADIUS * 0.05    # Spindle hole

    DIVIDER_COLOR = QColor(0, 0, 0, 64)

    def __init__(self, side: int = 0, colors: Optional[StatusColors] = None,
                 show_sector_lines: bool = True, parent=None):
        super().__init__(parent)

        self.side = side
        self.colors = colors or StatusColors()
        self.show_sector_lines = show_sector_lines

        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)
        self.scene.setBackgroundBrush(QBrush(QColor(255, 255, 255)))

        self.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setMinimumSize(200, 200)

        margin = 10.0
        size = (self.OUTER_RADIUS + margin) * 2
        self.scene.setSceneRect(-self.OUTER_RADIUS - margin, -self.OUTER_RADIUS - margin,
                                size, size)

        self._wedges: Dict[int, SectorWedgeItem] = {}

    def _status_color(self, status: BlockStatus) -> QColor:
        return QColor(self.colors.color_for(status))

    def set_map_file(self, map_file: Optional[MapFile]) -> None:
        """Rebuild the view for a mapfile (or clear it with None)."""
        self.scene.clear()
        self._wedges = {}

        if map_file is None:
            return

        floppy = map_file.floppy_type
        ring_width = (self.OUTER_RADIUS - self.TRACK_RADIUS) / floppy.tracks
        sector_span = 360.0 / floppy.sectors

        # Disk background
        background = QGraphicsPathItem(
            create_wedge_path(self.HUB_RADIUS, self.OUTER_RADIUS, 90.0, -360.0)
        )
        background.setPen(QPen(Qt.PenStyle.NoPen))
        background.setBrush(QBrush(self._status_color(BlockStatus.NON_TRIED)))
        background.setZValue(-100)
        self.scene.addItem(background)

        for sector in map_file.sectors():
            if sector.side != self.side or sector.status == BlockStatus.NON_TRIED:
                continue

            outer_radius = self.OUTER_RADIUS - sector.track * ring_width
            wedge = SectorWedgeItem(
                sector,
                inner_radius=outer_radius - ring_width,
                outer_radius=outer_radius,
                start_angle=90.0 - (sector.sector - 1) * sector_span,
                span_angle=-sector_span,
                color=self._status_color(sector.status),
            )
            self.scene.addItem(wedge)
            self._wedges[sector.index] = wedge

        if self.show_sector_lines:
            self._add_sector_lines(floppy.sectors)

        logger.debug(f"Side {self.side}: drew {len(self._wedges)} sectors")
        self.fit_disk()

    def _add_sector_lines(self, sectors_per_track: int) -> None:
        pen = QPen(self.DIVIDER_COLOR, 1.0)
        pen.setCosmetic(True)
        outer = self.OUTER_RADIUS
        inner = self.TRACK_RADIUS

        for i in range(sectors_per_track):
            path = QPainterPath()
            path.arcMoveTo(QRectF(-inner, -inner, inner * 2, inner * 2),
                           90.0 - i * 360.0 / sectors_per_track)
            start = path.currentPosition()
            path.arcMoveTo(QRectF(-outer, -outer, outer * 2, outer * 2),
                           90.0 - i * 360.0 / sectors_per_track)
            end = path.currentPosition()

            line = QGraphicsLineItem(start.x(), start.y(), end.x(), end.y())
            line.setPen(pen)
            line.setZValue(10)
            self.scene.addItem(line)

    def wedge_count(self) -> int:
        """Number of sectors drawn individually."""
        return len(self._wedges)

    def get_wedge(self, index: int) -> Optional[SectorWedgeItem]:
        """Get the wedge for a linear sector index, if drawn."""
        return self._wedges.get(index)

    def fit_disk(self) -> None:
        """Scale the view so the whole disk is visible."""
        self.fitInView(self.scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.fit_disk()
