"""
Unit tests for the command-line entry point.

The terminal session and the file manager are replaced with fakes; everything
else (walk, store, config) runs for real against a temporary home directory.
"""

import curses
import logging
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from homefind import cli
from homefind.tools.index_store import IndexStore, default_index_path


class FakeSession:
    """Records what the CLI would have shown and returns a canned selection."""

    def __init__(self, selection=None):
        self.selection = selection
        self.calls = []

    def __call__(self, paths, config=None):
        self.calls.append(list(paths))
        return self.selection


class TestMain:
    """Test cases for cli.main."""

    @pytest.fixture(autouse=True)
    def _home(self, monkeypatch):
        """Point HOME at a small temporary tree and fake the terminal session."""
        self.temp_dir = tempfile.mkdtemp()
        self.home = Path(self.temp_dir) / "home"
        (self.home / "projects" / "homefind").mkdir(parents=True)
        (self.home / "projects" / "homefind" / "plan.md").write_text("plan")
        (self.home / "music").mkdir()
        (self.home / "music" / "song.flac").write_text("la")
        (self.home / ".cache" / "junk").mkdir(parents=True)
        (self.home / ".cache" / "junk" / "blob").write_text("x")
        self.index_path = default_index_path(self.home)
        self.revealer = MagicMock()

        monkeypatch.setenv("HOME", str(self.home))
        monkeypatch.setenv("USERPROFILE", str(self.home))
        self.fake_session = FakeSession()
        monkeypatch.setattr(cli, "run_terminal_session", self.fake_session)

        yield

        shutil.rmtree(self.temp_dir)

    def test_index_command_builds_and_exits(self, capsys):
        """Test the explicit rebuild mode."""
        status = cli.main(["index"], revealer=self.revealer)

        assert status == 0
        assert self.fake_session.calls == []
        paths = IndexStore(self.index_path).load()
        assert str(self.home / "music" / "song.flac") in paths
        assert not any(".cache" in p for p in paths)
        out = capsys.readouterr().out
        assert "Indexing home directory..." in out
        assert "Finished! Indexed 2 files" in out

    def test_index_command_replaces_existing_index(self):
        """Test that a rebuild replaces the stored index wholesale."""
        IndexStore(self.index_path).save(["/stale/path"])

        cli.main(["index"], revealer=self.revealer)

        assert "/stale/path" not in IndexStore(self.index_path).load()

    def test_missing_index_triggers_rebuild(self, capsys):
        """Test that a normal run without an index builds one and browses it."""
        assert not self.index_path.exists()

        status = cli.main([], revealer=self.revealer)

        assert status == 0
        assert "Index not found in home folder. Running setup..." in capsys.readouterr().out
        assert self.index_path.exists()
        assert len(self.fake_session.calls) == 1
        assert self.fake_session.calls[0]
        assert self.fake_session.calls[0] == IndexStore(self.index_path).load()

    def test_existing_index_is_not_rebuilt(self, capsys):
        """Test that a present index is used as is."""
        IndexStore(self.index_path).save(["/cached/only.txt"])

        cli.main([], revealer=self.revealer)

        assert self.fake_session.calls == [["/cached/only.txt"]]
        assert "Running setup" not in capsys.readouterr().out

    def test_corrupt_index_aborts_without_rebuild(self, capsys):
        """Test that garbage in the index file is fatal and left untouched."""
        garbage = b"\xc1\xc1 not an index \x00\xff"
        self.index_path.write_bytes(garbage)

        status = cli.main([], revealer=self.revealer)

        assert status == 1
        captured = capsys.readouterr()
        assert "Failed to load index" in captured.err
        assert "Indexing home directory" not in captured.out
        assert self.index_path.read_bytes() == garbage
        assert self.fake_session.calls == []

    def test_empty_index_exits_with_message(self, capsys):
        """Test that an empty index informs the user and skips the session."""
        IndexStore(self.index_path).save([])

        status = cli.main([], revealer=self.revealer)

        assert status == 0
        assert "Index is empty. Try running `index` again." in capsys.readouterr().out
        assert self.fake_session.calls == []

    def test_selection_is_revealed(self, capsys):
        """Test that the chosen path goes to the file manager."""
        self.fake_session.selection = str(self.home / "music" / "song.flac")

        status = cli.main([], revealer=self.revealer)

        assert status == 0
        self.revealer.reveal.assert_called_once_with(str(self.home / "music" / "song.flac"))
        assert "Revealing: " in capsys.readouterr().out

    def test_undecodable_selection_is_printable(self, capsys):
        """Test that a selected path with non UTF-8 bytes is printed and revealed as is."""
        selected = str(self.home / "caf\udce9.txt")
        self.fake_session.selection = selected

        status = cli.main([], revealer=self.revealer)

        assert status == 0
        self.revealer.reveal.assert_called_once_with(selected)
        assert "caf?.txt" in capsys.readouterr().out

    def test_cancel_reveals_nothing(self):
        """Test that no selection means no reveal."""
        status = cli.main([], revealer=self.revealer)

        assert status == 0
        self.revealer.reveal.assert_not_called()

    def test_unresolvable_home(self, capsys):
        """Test that a missing home directory aborts before any work."""
        with patch.object(cli.Path, "home", side_effect=RuntimeError("Could not determine home directory")):
            status = cli.main([], revealer=self.revealer)

        assert status == 1
        assert "System error" in capsys.readouterr().err
        assert not self.index_path.exists()

    def test_build_failure(self, capsys, monkeypatch):
        """Test that an unwalkable home fails the build."""
        missing = Path(self.temp_dir) / "gone"
        monkeypatch.setenv("HOME", str(missing))
        monkeypatch.setenv("USERPROFILE", str(missing))

        status = cli.main(["index"], revealer=self.revealer)

        assert status == 1
        assert "Failed to build index" in capsys.readouterr().err

    def test_invalid_config_is_fatal(self, capsys):
        """Test that a broken configuration file stops the program."""
        (self.home / ".homefind.yaml").write_text("search:\n  max_results: 0\n")

        status = cli.main([], revealer=self.revealer)

        assert status == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_config_limits_reach_session(self):
        """Test that the configuration is passed to the session."""
        (self.home / ".homefind.yaml").write_text("search:\n  max_results: 7\n")
        seen = {}

        def fake(paths, config=None):
            seen['config'] = config
            return None

        with patch.object(cli, "run_terminal_session", fake):
            cli.main([], revealer=self.revealer)

        assert seen['config'].search.max_results == 7

    def test_ui_error(self, capsys):
        """Test that a terminal failure is reported."""
        IndexStore(self.index_path).save(["/a"])

        with patch.object(cli, "run_terminal_session", side_effect=curses.error("no terminal")):
            status = cli.main([], revealer=self.revealer)

        assert status == 1
        assert "UI error" in capsys.readouterr().err

    def test_init_config(self, capsys):
        """Test writing the configuration template."""
        status = cli.main(["init-config"], revealer=self.revealer)

        target = self.home / ".config" / "homefind" / "config.yaml"
        assert status == 0
        assert target.exists()
        assert str(target) in capsys.readouterr().out

    def test_init_config_custom_path(self):
        target = Path(self.temp_dir) / "elsewhere.yaml"

        assert cli.main(["init-config", str(target)], revealer=self.revealer) == 0
        assert target.exists()

    def test_verbose_enables_debug(self):
        IndexStore(self.index_path).save(["/a"])

        cli.main(["--verbose"], revealer=self.revealer)

        assert logging.getLogger().level == logging.DEBUG


class TestHelpers:
    """Test cases for CLI helpers."""

    def test_arg_parser(self):
        parser = cli.build_arg_parser()

        assert parser.parse_args([]).command is None
        assert parser.parse_args(["index"]).command == "index"
        args = parser.parse_args(["--config", "c.yaml", "-v", "init-config", "out.yaml"])
        assert args.config == "c.yaml"
        assert args.verbose is True
        assert args.path == "out.yaml"

    def test_print_progress(self, capsys):
        cli.print_progress(20000)
        assert capsys.readouterr().out == "\rIndexed 20000 files..."

    def test_display_path(self):
        assert cli.display_path("/h/plain.txt") == "/h/plain.txt"
        assert "\udce9" not in cli.display_path("/h/caf\udce9.txt")
