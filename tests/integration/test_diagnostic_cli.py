"""
Diagnostic CLI integration tests.

Runs cofi-diagnose commands against snapshot and registry files in a
temporary directory.
"""

import json
import logging

import pytest
from click.testing import CliRunner

from cofi.__main__ import cli


@pytest.fixture(autouse=True)
def restore_cofi_logger():
    """The CLI installs a handler on the cofi logger; undo it after each test."""
    logger = logging.getLogger("cofi")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def snapshot_file(tmp_path, write_json):
    return write_json(tmp_path / "snapshot.json", {
        "windows": [
            {"id": 1, "title": "Mozilla Firefox", "class_name": "firefox", "instance": "Navigator"},
            {"id": 2, "title": "Terminal - bash", "class_name": "Alacritty", "instance": "alacritty"},
            {"id": 3, "title": "main.py - Visual Studio Code", "class_name": "Code",
             "instance": "code", "desktop": 1},
        ],
        "active_id": 1,
        "current_desktop": 0,
        "desktop_count": 2,
        "desktop_names": ["web", "code"],
    })


@pytest.fixture
def run(harpoon_file, names_file):
    """Invoke the CLI with registry files under the test config dir."""
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, [
            "--harpoon-file", str(harpoon_file),
            "--names-file", str(names_file),
            *args,
        ])
    return _run


class TestRankCommand:
    """Test `cofi-diagnose rank`."""

    def test_json_alt_tab(self, run, snapshot_file):
        """Empty query selects the previous window."""
        result = run("rank", str(snapshot_file), "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [row["window"]["id"] for row in data["windows"]] == [1, 2, 3]
        assert data["selected_index"] == 1

    def test_json_query(self, run, snapshot_file):
        """Query ranks and annotates matches."""
        result = run("rank", str(snapshot_file), "-q", "vsc", "--json")

        data = json.loads(result.stdout)
        assert [row["window"]["id"] for row in data["windows"]] == [3]
        assert data["windows"][0]["tier"] == "initials"
        # v(isual) s(tudio) c(ode) after main, py: two extra words
        assert data["windows"][0]["score"] == 1900 + 2 * 50

    def test_registries_applied(self, run, snapshot_file, harpoon_file, names_file, write_json):
        """Harpoon keys and custom names from disk follow restarted windows."""
        write_json(harpoon_file, {"harpoon_slots": [
            {"slot": 10, "window_id": 900, "title": "Terminal - bash",
             "class_name": "Alacritty", "instance": "alacritty", "type": "Normal"},
        ]})
        write_json(names_file, {"named_windows": [
            {"window_id": 901, "custom_name": "browser", "original_title": "Mozilla*",
             "class_name": "firefox", "instance": "Navigator", "type": "Normal", "assigned": 1},
        ]})
        before = harpoon_file.read_text()

        result = run("rank", str(snapshot_file), "-q", "browser", "--json")

        data = json.loads(result.stdout)
        assert data["windows"][0]["window"]["id"] == 1
        assert data["windows"][0]["custom_name"] == "browser"

        result = run("rank", str(snapshot_file), "--json")
        keys = {row["window"]["id"]: row["harpoon_key"] for row in json.loads(result.stdout)["windows"]}
        assert keys[2] == "a"

        # Diagnostics never rewrite the user's registries
        assert harpoon_file.read_text() == before

    def test_workspaces_tab(self, run, snapshot_file):
        result = run("rank", str(snapshot_file), "--tab", "workspaces", "--json")

        data = json.loads(result.stdout)
        assert [w["name"] for w in data["workspaces"]] == ["web", "code"]

    def test_table_output(self, run, snapshot_file):
        """Formatted output names the selected window."""
        result = run("rank", str(snapshot_file))

        assert result.exit_code == 0, result.output
        assert "Selected:" in result.output
        assert "Terminal - bash" in result.output

    def test_no_match(self, run, snapshot_file):
        result = run("rank", str(snapshot_file), "-q", "qqq")

        assert result.exit_code == 0
        assert "no target" in result.output

    def test_invalid_snapshot(self, run, tmp_path, write_json):
        """Invalid snapshots exit 1 with a structured error."""
        path = write_json(tmp_path / "bad.json", {"windows": [{"title": "no id"}]})

        result = run("rank", str(path), "--json")

        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"]["code"] == 1202

    def test_unreadable_snapshot(self, run, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")

        result = run("rank", str(path))

        assert result.exit_code == 1
        assert "FILE_READ_ERROR" in result.output

    def test_undecodable_snapshot(self, run, tmp_path):
        """Non-UTF-8 snapshot files are reported, not raised."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"windows": [{"id": 1, "title": "caf\xe9"}]}')

        result = run("rank", str(path), "--json")

        assert result.exit_code == 1
        assert json.loads(result.stdout)["error"]["code"] == 1200


class TestRegistryCommands:
    """Test `cofi-diagnose harpoon`, `names` and `options`."""

    def test_harpoon_json(self, run, harpoon_file, write_json):
        write_json(harpoon_file, {"harpoon_slots": [{"slot": 1, "window_id": 5, "title": "Mail"}]})

        result = run("harpoon", "--json")

        data = json.loads(result.stdout)
        assert [s["key"] for s in data] == ["1"]

    def test_harpoon_all(self, run):
        """--all lists empty slots too."""
        result = run("harpoon", "--all", "--json")

        assert len(json.loads(result.stdout)) == 36

    def test_names_json(self, run, names_file, write_json):
        write_json(names_file, {"named_windows": [
            {"window_id": 5, "custom_name": "mail", "assigned": False},
        ]})

        result = run("names", "--json")

        assert json.loads(result.stdout) == [{
            "window_id": 5, "custom_name": "mail", "original_title": "", "class_name": "",
            "instance": "", "type": "Normal", "assigned": 0,
        }]

    def test_options_json(self, run, tmp_path, write_json):
        path = write_json(tmp_path / "cofi.json", {"options": {"tile_columns": 7}})

        result = run("options", "--file", str(path), "--json")

        assert json.loads(result.stdout)["tile_columns"] == 3

    def test_options_table(self, run, tmp_path):
        result = run("options", "--file", str(tmp_path / "missing.json"))

        assert result.exit_code == 0
        assert "close_on_focus_loss" in result.output
