"""Tests for the promptscan command line."""
import json
import os
import sys
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from promptscan import cli
from promptscan.safe_subprocess import CommandOutput

R_OUTPUT = CommandOutput(stdout="", stderr="R version 3.6.3 (2020-02-29)\n")


@patch("promptscan.context.exec_cmd", return_value=R_OUTPUT)
def test_module_plain(mock_exec, r_project, capsys):
    assert cli.main(["module", "r", "--path", str(r_project), "--plain"]) == 0
    assert capsys.readouterr().out == "via R v3.6.3 "
    assert mock_exec.call_args.args[:2] == ("r", ["--version"])


@patch("promptscan.context.exec_cmd", return_value=R_OUTPUT)
def test_module_ansi(mock_exec, r_project, capsys):
    cli.main(["module", "r", "--path", str(r_project)])
    assert "\x1b[1;34mv3.6.3\x1b[0m" in capsys.readouterr().out


@patch("promptscan.context.exec_cmd", return_value=R_OUTPUT)
def test_module_json(mock_exec, r_project, capsys):
    cli.main(["module", "r", "--path", str(r_project), "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "r"
    assert data["prefix"] == "" and data["suffix"] == ""
    assert {"value": "v3.6.3", "style": "bold fg:4"} in data["segments"]


@patch("promptscan.context.exec_cmd", return_value=R_OUTPUT)
def test_module_absent_prints_nothing(mock_exec, tmp_path, capsys):
    assert cli.main(["module", "r", "--path", str(tmp_path)]) == 0
    assert capsys.readouterr().out == ""
    mock_exec.assert_not_called()


@patch("promptscan.context.exec_cmd", return_value=R_OUTPUT)
def test_module_with_only_unknown_variables_prints_nothing(mock_exec, r_project, capsys, monkeypatch):
    monkeypatch.setenv("PROMPTSCAN_R_FORMAT", "$arch")
    assert cli.main(["module", "r", "--path", str(r_project), "--json"]) == 0
    assert capsys.readouterr().out == ""


def test_list_modules(capsys):
    assert cli.main(["modules"]) == 0
    assert "r: The currently installed version of R" in capsys.readouterr().out


def test_metrics(capsys):
    assert cli.main(["metrics"]) == 0
    assert "promptscan_module_outcomes_total" in capsys.readouterr().out
