"""
GUI package for ddfloppy.

PyQt6-based viewer drawing each disk side as a circular sector map.
"""

from ddfloppy.gui.main_window import MainWindow

__all__ = ["MainWindow"]
