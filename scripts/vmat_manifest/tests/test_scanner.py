"""
Tests for the descriptor scanner.
"""

import os
from unittest.mock import patch
import pytest

from ..processing import scanner as scanner_module
from ..processing.scanner import DescriptorScanner
from ..errors import ScanError
from ..status import PipelineStage


class TestDescriptorScanner:
    """Test recursive descriptor discovery."""

    def setup_method(self):
        self.scanner = DescriptorScanner(".vmat")

    def test_finds_files_at_any_depth(self, tmp_path):
        (tmp_path / "a" / "b" / "c").mkdir(parents=True)
        (tmp_path / "top.vmat").touch()
        (tmp_path / "a" / "b" / "c" / "deep.vmat").touch()
        (tmp_path / "a" / "ignored.png").touch()
        (tmp_path / "a" / "notes.vmat.txt").touch()

        found = self.scanner.scan(tmp_path)

        assert sorted(found) == sorted([
            str(tmp_path / "top.vmat"),
            str(tmp_path / "a" / "b" / "c" / "deep.vmat"),
        ])
        assert all(os.path.isabs(path) for path in found)

    def test_extension_match_is_case_sensitive(self, tmp_path):
        (tmp_path / "upper.VMAT").touch()
        (tmp_path / "lower.vmat").touch()

        assert self.scanner.scan(tmp_path) == [str(tmp_path / "lower.vmat")]

    def test_empty_tree_returns_empty_list(self, tmp_path):
        (tmp_path / "empty").mkdir()
        assert self.scanner.scan(tmp_path) == []

    def test_order_is_deterministic(self, tmp_path):
        for name in ("c.vmat", "a.vmat", "b.vmat"):
            (tmp_path / name).touch()

        assert self.scanner.scan(tmp_path) == [str(tmp_path / n) for n in ("a.vmat", "b.vmat", "c.vmat")]

    def test_relative_root_gives_absolute_paths(self, tmp_path, monkeypatch):
        (tmp_path / "x.vmat").touch()
        monkeypatch.chdir(tmp_path)

        assert self.scanner.scan(".") == [os.path.join(os.getcwd(), "x.vmat")]

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(ScanError) as exc_info:
            self.scanner.scan(tmp_path / "missing")

        assert exc_info.value.stage is PipelineStage.SCANNING
        assert "does not exist" in str(exc_info.value)

    def test_traversal_error_aborts_scan(self, tmp_path):
        def failing_walk(top, onerror=None):
            onerror(PermissionError(13, "Permission denied", str(tmp_path / "locked")))
            yield from ()

        with patch.object(scanner_module.os, "walk", side_effect=failing_walk):
            with pytest.raises(ScanError) as exc_info:
                self.scanner.scan(tmp_path)

        assert exc_info.value.path == str(tmp_path / "locked")
        assert "Permission denied" in str(exc_info.value)
