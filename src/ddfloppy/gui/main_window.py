"""
Main window for the ddfloppy GUI.

Shows every side of the disk next to each other, a color legend and a
status bar with the mapfile's progress information.
"""

import logging
from pathlib import Path
from typing import List, Optional

from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QFileDialog,
    QMessageBox,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence

from ddfloppy.core.mapfile import BlockStatus, MapFile, MapFileError, load_mapfile
from ddfloppy.core.settings import Settings
from ddfloppy.gui.widgets import FloppyView

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Top level window showing a mapfile as a floppy disk.

    Example:
        >>> window = MainWindow(map_file)
        >>> window.show()
    """

    def __init__(self, map_file: Optional[MapFile] = None,
                 settings: Optional[Settings] = None,
                 mapfile_path=None, parent=None):
        super().__init__(parent)

        self.settings = settings or Settings.instance()
        self.map_file: Optional[MapFile] = None
        self.mapfile_path: Optional[Path] = Path(mapfile_path) if mapfile_path else None
        self.views: List[FloppyView] = []

        self.setWindowTitle("ddfloppy")
        self.resize(self.settings.display.window_width, self.settings.display.window_height)

        self._create_menu()
        self._create_layout()

        if map_file is not None:
            self.set_map_file(map_file)

    # =========================================================================
    # Layout
    # =========================================================================

    def _create_menu(self) -> None:
        file_menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open Mapfile...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open)
        file_menu.addAction(open_action)

        file_menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    def _create_layout(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)
        self.sides_layout = QHBoxLayout()
        main_layout.addLayout(self.sides_layout, stretch=1)
        main_layout.addLayout(self._create_legend())

        self.status_label = QLabel("No mapfile loaded")
        self.statusBar().addWidget(self.status_label, stretch=1)

    def _create_legend(self) -> QHBoxLayout:
        legend = QHBoxLayout()
        legend.addStretch()
        for status in BlockStatus:
            swatch = QLabel()
            swatch.setFixedSize(14, 14)
            swatch.setStyleSheet(
                f"background-color: {self.settings.display.colors.color_for(status)};"
                f" border: 1px solid #404040;"
            )
            legend.addWidget(swatch)
            legend.addWidget(QLabel(status.label))
            legend.addSpacing(12)
        legend.addStretch()
        return legend

    def _clear_views(self) -> None:
        while self.sides_layout.count():
            item = self.sides_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.views = []

    # =========================================================================
    # Mapfile Handling
    # =========================================================================

    def set_map_file(self, map_file: MapFile) -> None:
        """Display a parsed mapfile, replacing the current one."""
        self.map_file = map_file
        self._clear_views()

        display = self.settings.display
        for side in range(map_file.floppy_type.sides):
            column = QWidget()
            column_layout = QVBoxLayout(column)
            title = QLabel(f"Side {side}")
            title.setAlignment(Qt.AlignmentFlag.AlignCenter)
            column_layout.addWidget(title)

            view = FloppyView(side=side, colors=display.colors,
                              show_sector_lines=display.show_sector_lines)
            view.set_map_file(map_file)
            column_layout.addWidget(view, stretch=1)

            self.sides_layout.addWidget(column)
            self.views.append(view)

        self.status_label.setText(self.status_text())
        title = f"ddfloppy - {map_file.floppy_type.name}"
        if self.mapfile_path is not None:
            title += f" - {self.mapfile_path.name}"
        self.setWindowTitle(title)

    def status_text(self) -> str:
        """Build the status bar text for the current mapfile."""
        if self.map_file is None:
            return "No mapfile loaded"

        map_file = self.map_file
        parts = [
            map_file.status.label,
            f"Pass {map_file.pass_num}",
            f"Position {map_file.current_pos:#x}",
        ]
        if map_file.start_time is not None:
            parts.append(f"Started {map_file.start_time:%Y-%m-%d %H:%M:%S}")
        if map_file.current_time is not None:
            parts.append(f"Updated {map_file.current_time:%Y-%m-%d %H:%M:%S}")
        return " | ".join(parts)

    def open_mapfile(self, path) -> bool:
        """
        Load a mapfile from disk and display it.

        On failure an error dialog is shown and the current mapfile is kept.

        Returns:
            True if the mapfile was loaded
        """
        path = Path(path)
        try:
            map_file = load_mapfile(path)
        except MapFileError as e:
            logger.error(f"Failed to load mapfile: {e}")
            QMessageBox.critical(self, "Cannot Open Mapfile", str(e))
            return False

        self.mapfile_path = path
        self.set_map_file(map_file)
        return True

    def _on_open(self) -> None:
        start_dir = str(self.mapfile_path.parent) if self.mapfile_path else ""
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Mapfile", start_dir, "Mapfiles (*.map *.log);;All Files (*)"
        )
        if path:
            self.open_mapfile(path)
