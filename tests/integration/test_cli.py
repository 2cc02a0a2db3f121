"""
Integration tests for the ddfloppy command line.

Runs main() end to end against mapfiles written to a temporary directory.
"""

import logging

import pytest

from ddfloppy.core.settings import Settings
from ddfloppy.main import main
from ddfloppy.utils import logging as log_utils
from tests.fixtures import (
    FLOPPY_720K,
    FLOPPY_1_44M,
    build_mapfile,
    single_block,
    split_blocks,
    write_mapfile,
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep settings and log files inside the test directory."""
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    Settings.reset_instance()

    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    log_utils._console_handler = None
    Settings.reset_instance()


class TestSummary:
    """Test the terminal report mode."""

    def test_summary(self, tmp_path, capsys):
        path = write_mapfile(tmp_path, build_mapfile(single_block(FLOPPY_1_44M)))

        assert main([str(path), "--summary"]) == 0

        out = capsys.readouterr().out
        assert '3½" 1.44M' in out
        assert "S1 T79" in out

    def test_summary_with_bad_sectors(self, tmp_path, capsys):
        blocks = split_blocks(FLOPPY_1_44M.total_size, (512, "-"), (1024, "+"))
        path = write_mapfile(tmp_path, build_mapfile(blocks, status="-", pass_num=4))

        assert main([str(path), "-s"]) == 0

        out = capsys.readouterr().out
        assert "Bad sector" in out
        assert "Retrying bad sectors" in out

    def test_log_level_option(self, tmp_path):
        path = write_mapfile(tmp_path, build_mapfile(single_block(FLOPPY_720K)))

        assert main([str(path), "--summary", "--log-level", "info"]) == 0
        assert (tmp_path / "config" / "ddfloppy").is_dir()

    def test_invalid_log_level(self, tmp_path):
        path = write_mapfile(tmp_path, build_mapfile(single_block(FLOPPY_720K)))

        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "--log-level", "loud"])
        assert exc_info.value.code == 2


class TestFloppyTypeOption:
    """Test overriding size detection."""

    def test_explicit_type(self, tmp_path, capsys):
        path = write_mapfile(tmp_path, build_mapfile(single_block(FLOPPY_720K)))

        assert main([str(path), "--summary", "--type", '3.5" 720K']) == 0
        assert '3½" 720K' in capsys.readouterr().out

    def test_explicit_type_for_unknown_size(self, tmp_path):
        path = write_mapfile(tmp_path, "0 + 1\n0 1000 +")

        assert main([str(path), "--summary"]) == 1
        assert main([str(path), "--summary", "-t", '5.25" 360K']) == 0

    def test_unknown_type_is_usage_error(self, tmp_path):
        path = write_mapfile(tmp_path, build_mapfile(single_block(FLOPPY_720K)))

        with pytest.raises(SystemExit) as exc_info:
            main([str(path), "--type", "bogus"])
        assert exc_info.value.code == 2


class TestErrors:
    """Test exit codes for bad input."""

    def test_missing_mapfile_argument(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.map"), "--summary"]) == 1

    def test_invalid_line(self, tmp_path, capsys):
        path = write_mapfile(tmp_path, "0 + 1\n0 737280 +\ngarbage")

        assert main([str(path), "--summary"]) == 1
        assert "[Line: 3]" in capsys.readouterr().err

    def test_no_status_line(self, tmp_path):
        path = write_mapfile(tmp_path, "# only comments")
        assert main([str(path), "--summary"]) == 1

    def test_strict_rejects_gap(self, tmp_path):
        path = write_mapfile(tmp_path, "0 + 1\n0 512 +\n1024 736256 -")

        assert main([str(path), "--summary", "--strict"]) == 1


class TestListTypes:
    """Test the floppy type listing."""

    def test_list_types(self, capsys):
        assert main(["--list-types"]) == 0

        out = capsys.readouterr().out
        assert "1.44M" in out
        assert "1,474,560" in out
