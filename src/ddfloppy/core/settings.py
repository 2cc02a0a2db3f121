"""
Settings management for ddfloppy.

Settings are kept in small dataclasses grouped by category and persisted
as JSON in the platform-specific configuration directory. A single
Settings instance is shared by the command line entry point and the GUI.

Settings Categories:
    - Display: Sector status colors, window size, sector divider lines
    - Logging: Log file location and level
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from ddfloppy.core.mapfile import BlockStatus


# Module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Settings File Paths
# =============================================================================

def get_settings_dir() -> Path:
    """
    Directory holding ddfloppy settings and the default log file.

    Platform paths:
        - Linux: ~/.config/ddfloppy/
        - Windows: %APPDATA%/ddfloppy/
        - macOS: ~/Library/Application Support/ddfloppy/
    """
    if sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', Path.home() / 'AppData' / 'Roaming'))
        return base / 'ddfloppy'
    elif sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'ddfloppy'
    else:
        xdg_config = os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config')
        return Path(xdg_config) / 'ddfloppy'


def get_settings_file() -> Path:
    """Path of the JSON settings file."""
    return get_settings_dir() / 'settings.json'


# =============================================================================
# Settings Dataclasses
# =============================================================================

@dataclass
class StatusColors:
    """Fill colors for each sector status."""
    non_tried: str = "#808080"     # Gray
    non_trimmed: str = "#f0f000"   # Yellow
    non_scraped: str = "#0000f0"   # Blue
    bad_sector: str = "#f00000"    # Red
    finished: str = "#00f000"      # Green

    def color_for(self, status: BlockStatus) -> str:
        """Get the hex color for a block status."""
        return getattr(self, status.name.lower())


@dataclass
class DisplaySettings:
    """Display and window settings."""
    colors: StatusColors = field(default_factory=StatusColors)
    show_sector_lines: bool = True           # Draw sector divider lines
    window_width: int = 1000
    window_height: int = 560


@dataclass
class LoggingSettings:
    """Log output settings."""
    log_file: str = ""                       # Empty = settings dir/ddfloppy.log
    log_level: str = "DEBUG"

    def get_log_file(self) -> Path:
        if self.log_file:
            return Path(self.log_file)
        return get_settings_dir() / 'ddfloppy.log'

    def get_log_level(self) -> int:
        """Get log level as a logging constant."""
        level = logging.getLevelName(self.log_level.upper())
        if isinstance(level, int):
            return level
        return logging.DEBUG


# =============================================================================
# Shared Settings Instance
# =============================================================================

class Settings:
    """
    Singleton settings manager.

    Usage:
        settings = Settings.instance()
        settings.display.show_sector_lines = False
        settings.save()
    """

    _instance: Optional["Settings"] = None

    SETTINGS_VERSION = 1

    def __init__(self):
        self.display = DisplaySettings()
        self.logging = LoggingSettings()

    @classmethod
    def instance(cls) -> "Settings":
        """Get the singleton settings instance, loading it on first use."""
        if cls._instance is None:
            cls._instance = cls()
            cls._instance.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared instance so the next instance() call reloads from disk."""
        cls._instance = None

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self) -> bool:
        """
        Load settings from file.

        Returns:
            True if a settings file was read
        """
        settings_file = get_settings_file()

        if not settings_file.exists():
            logger.info(f"No settings file at {settings_file}, using defaults")
            return False

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in settings file, using defaults: {e}")
            return False
        except OSError as e:
            logger.warning(f"Could not read settings file, using defaults: {e}")
            return False

        if not isinstance(data, dict):
            logger.warning("Settings file does not contain an object, using defaults")
            return False

        display = data.get('display')
        if isinstance(display, dict):
            colors = display.pop('colors', None)
            self._load_dataclass(self.display, display)
            if isinstance(colors, dict):
                self._load_dataclass(self.display.colors, colors)
        if isinstance(data.get('logging'), dict):
            self._load_dataclass(self.logging, data['logging'])

        logger.info(f"Read settings from {settings_file}")
        return True

    def save(self) -> bool:
        """
        Save settings to file.

        Returns:
            True if the settings file was written
        """
        settings_file = get_settings_file()

        data = {
            'version': self.SETTINGS_VERSION,
            'saved_at': datetime.now().isoformat(),
            'display': asdict(self.display),
            'logging': asdict(self.logging),
        }

        try:
            settings_file.parent.mkdir(parents=True, exist_ok=True)

            # Write beside the target, then swap it in
            temp_file = settings_file.with_suffix('.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            temp_file.replace(settings_file)

        except OSError as e:
            logger.error(f"Could not write settings file: {e}")
            return False

        logger.info(f"Wrote settings to {settings_file}")
        return True

    def _load_dataclass(self, target: Any, data: Dict[str, Any]) -> None:
        """Copy known keys of the expected type onto a settings dataclass."""
        for key, value in data.items():
            if not hasattr(target, key):
                logger.debug(f"Ignoring unknown setting: {key}")
                continue
            default = getattr(target, key)
            if not isinstance(value, type(default)):
                logger.warning(f"Ignoring setting {key} with wrong type: {value!r}")
                continue
            setattr(target, key, value)
