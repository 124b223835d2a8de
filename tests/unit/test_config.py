"""Unit tests for options loading and saving."""

import json
import logging

from cofi.config import load_options, save_options
from cofi.models.options import Alignment, CofiOptions


class TestLoadOptions:
    """Test option defaults and fallbacks."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test defaults when cofi.json does not exist."""
        options = load_options(tmp_path / "cofi.json")

        assert options == CofiOptions()
        assert options.close_on_focus_loss is True
        assert options.align == Alignment.CENTER
        assert options.workspaces_per_row == 0
        assert options.tile_columns == 2

    def test_reads_options_key(self, tmp_path, write_json):
        """Test values under "options" are applied."""
        path = write_json(tmp_path / "cofi.json", {"options": {
            "close_on_focus_loss": False,
            "align": "top_left",
            "workspaces_per_row": 4,
            "tile_columns": 3,
        }})

        options = load_options(path)

        assert options.close_on_focus_loss is False
        assert options.align == Alignment.TOP_LEFT
        assert options.workspaces_per_row == 4
        assert options.tile_columns == 3

    def test_invalid_tile_columns_becomes_three(self, tmp_path, write_json, caplog):
        """Test unsupported column counts fall back to 3."""
        path = write_json(tmp_path / "cofi.json", {"options": {"tile_columns": 5}})

        with caplog.at_level(logging.WARNING):
            options = load_options(path)

        assert options.tile_columns == 3
        assert "tile_columns" in caplog.text

    def test_unknown_align_becomes_center(self, tmp_path, write_json):
        """Test unknown alignment names fall back to center."""
        path = write_json(tmp_path / "cofi.json", {"options": {"align": "middle"}})

        assert load_options(path).align == Alignment.CENTER

    def test_invalid_field_dropped_others_kept(self, tmp_path, write_json, caplog):
        """Test one bad value does not discard the rest."""
        path = write_json(tmp_path / "cofi.json", {"options": {
            "workspaces_per_row": -2,
            "align": "bottom",
        }})

        with caplog.at_level(logging.WARNING):
            options = load_options(path)

        assert options.workspaces_per_row == 0
        assert options.align == Alignment.BOTTOM
        assert "workspaces_per_row" in caplog.text

    def test_unknown_keys_ignored(self, tmp_path, write_json, caplog):
        """Test unrecognised option names are warned about and skipped."""
        path = write_json(tmp_path / "cofi.json", {"options": {"colour": "blue"}})

        with caplog.at_level(logging.WARNING):
            options = load_options(path)

        assert options == CofiOptions()
        assert "colour" in caplog.text

    def test_invalid_utf8_gives_defaults(self, tmp_path):
        """Test an undecodable options file falls back to defaults."""
        path = tmp_path / "cofi.json"
        path.write_bytes(b'{"options": {"align": "\xff"}}')

        assert load_options(path) == CofiOptions()

    def test_options_not_an_object(self, tmp_path, write_json):
        """Test a non-object "options" value gives defaults."""
        path = write_json(tmp_path / "cofi.json", {"options": [1, 2]})

        assert load_options(path) == CofiOptions()


class TestSaveOptions:
    """Test writing cofi.json."""

    def test_roundtrip(self, tmp_path):
        """Test saved options load back unchanged."""
        path = tmp_path / "cofi.json"
        options = CofiOptions(align=Alignment.RIGHT, workspaces_per_row=3, tile_columns=3)

        assert save_options(options, path)

        assert load_options(path) == options

    def test_preserves_other_keys(self, tmp_path, write_json):
        """Test unrelated top-level keys survive a save."""
        path = write_json(tmp_path / "cofi.json", {"theme": "dark", "options": {"align": "top"}})

        save_options(CofiOptions(close_on_focus_loss=False), path)

        data = json.loads(path.read_text())
        assert data["theme"] == "dark"
        assert data["options"]["close_on_focus_loss"] is False
        assert data["options"]["align"] == "center"
