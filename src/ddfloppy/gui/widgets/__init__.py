"""
Custom widgets for the ddfloppy GUI.
"""

from ddfloppy.gui.widgets.floppy_view import (
    FloppyView,
    SectorWedgeItem,
    create_wedge_path,
)

__all__ = [
    "FloppyView",
    "SectorWedgeItem",
    "create_wedge_path",
]
