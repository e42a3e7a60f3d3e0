"""Tests for promptscan.context directory scanning."""
import os
import sys
from unittest.mock import patch

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from promptscan.context import Context, DirContents, matches


class TestDirContents:
    def test_lists_single_level(self, tmp_path):
        (tmp_path / "main.R").write_text("x <- 1\n")
        (tmp_path / "archive.tar.gz").write_bytes(b"")
        (tmp_path / ".Rprofile").write_text("")
        sub = tmp_path / "R"
        sub.mkdir()
        (sub / "deep.py").write_text("")

        contents = DirContents.from_path(tmp_path)

        assert contents.files == {"main.R", "archive.tar.gz", ".Rprofile"}
        assert contents.folders == {"R"}
        assert contents.extensions == {"R", "gz"}

    def test_nested_files_are_not_seen(self, tmp_path):
        sub = tmp_path / "scripts"
        sub.mkdir()
        (sub / "model.R").write_text("")
        assert matches(Context(tmp_path), ["R"]) is False


class TestMatches:
    def test_empty_directory(self, tmp_path):
        assert matches(Context(tmp_path), ["R"]) is False

    def test_one_matching_file(self, r_project):
        assert matches(Context(r_project), ["R"]) is True

    @pytest.mark.parametrize("count", [2, 5])
    def test_many_matching_files(self, tmp_path, count):
        for i in range(count):
            (tmp_path / f"file{i}.R").write_text("")
        assert matches(Context(tmp_path), ["R"]) is True

    def test_extension_match_is_exact(self, tmp_path):
        (tmp_path / "lower.r").write_text("")
        (tmp_path / "notes.Rmd").write_text("")
        assert matches(Context(tmp_path), ["R"]) is False

    def test_missing_directory(self, tmp_path):
        assert matches(Context(tmp_path / "nope"), ["R"]) is False


class TestScanDir:
    def test_try_begin_scan_absent_for_unreadable_dir(self, tmp_path):
        assert Context(tmp_path / "missing").try_begin_scan() is None

    def test_files_and_folders(self, tmp_path):
        (tmp_path / "DESCRIPTION").write_text("Package: demo\n")
        (tmp_path / "renv").mkdir()
        ctx = Context(tmp_path)

        assert ctx.try_begin_scan().set_files(["DESCRIPTION"]).is_match()
        assert ctx.try_begin_scan().set_folders(["renv"]).is_match()
        assert not ctx.try_begin_scan().set_folders(["DESCRIPTION"]).is_match()
        assert not ctx.try_begin_scan().set_extensions(["R"]).set_files(["setup.py"]).is_match()

    def test_listing_is_cached(self, tmp_path):
        ctx = Context(tmp_path)
        assert ctx.try_begin_scan().set_extensions(["R"]).is_match() is False
        (tmp_path / "late.R").write_text("")
        # Snapshot taken once per context
        assert ctx.try_begin_scan().set_extensions(["R"]).is_match() is False
        assert Context(tmp_path).try_begin_scan().set_extensions(["R"]).is_match() is True


class TestContext:
    def test_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert Context().current_dir.resolve() == tmp_path.resolve()

    def test_exec_cmd_delegates_to_runner(self, tmp_path, spy_runner):
        runner = spy_runner(result=None)
        ctx = Context(tmp_path, runner=runner)
        assert ctx.exec_cmd("r", ("--version",)) is None
        assert runner.calls == [("r", ["--version"])]

    @patch("promptscan.context.exec_cmd", return_value=None)
    def test_default_runner_runs_in_current_dir(self, mock_exec, tmp_path):
        ctx = Context(tmp_path)
        assert ctx.exec_cmd("r", ["--version"]) is None
        mock_exec.assert_called_once_with("r", ["--version"], cwd=str(tmp_path))

    def test_new_module_carries_config_table(self, tmp_path):
        ctx = Context(tmp_path, config={"r": {"format": "$version"}})
        module = ctx.new_module("r")
        assert module.name == "r"
        assert module.config == {"format": "$version"}
        assert ctx.new_module("other").config == {}
