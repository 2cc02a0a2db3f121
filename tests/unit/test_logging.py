"""
Unit tests for logging helpers.
"""

import logging

import pytest

from ddfloppy.core import MapFile
from ddfloppy.utils import logging as log_utils
from ddfloppy.utils import setup_logging, log_mapfile_info


@pytest.fixture
def restore_root_handlers():
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    log_utils._console_handler = None


class TestSetupLogging:
    """Test logging configuration."""

    def test_creates_log_directory(self, tmp_path, restore_root_handlers):
        log_file = tmp_path / "logs" / "ddfloppy.log"
        setup_logging(log_file)
        assert log_file.parent.is_dir()

    def test_console_handler_not_duplicated(self, tmp_path, restore_root_handlers):
        setup_logging(tmp_path / "a.log")
        setup_logging(tmp_path / "b.log")

        root = logging.getLogger()
        console_handlers = [h for h in root.handlers if h is log_utils._console_handler]
        assert len(console_handlers) == 1


class TestLogMapfileInfo:
    """Test mapfile summary logging."""

    def test_summary_logged(self, caplog):
        map_file = MapFile.load(["0x200 - 3", "0 368640 +"])

        with caplog.at_level(logging.INFO):
            log_mapfile_info(map_file)

        text = caplog.text
        assert '5¼" 360K' in text
        assert "Retrying bad sectors, pass 3, position 0x200" in text
        assert "720 sectors" in text
