"""Tests for `helixir progress` and the top-level app options."""

import json

import helixir
from helixir.cli.main import app as cli_app


def test_version(runner):
    result = runner.invoke(cli_app, ["--version"])
    assert result.exit_code == 0
    assert f"helixir version: {helixir.__version__}" in result.output


def test_no_progress_yet(runner):
    result = runner.invoke(cli_app, ["progress"])

    assert result.exit_code == 0
    assert "Current lesson: 0" in result.output
    assert "No lessons completed yet." in result.output


def test_completed_lessons_listed(runner, tmp_path):
    state_file = tmp_path / "helixdb-cfg" / "instance.json"
    state_file.parent.mkdir()
    state_file.write_text(json.dumps({"current_lesson": 4, "completed_lessons": [3, 1]}))

    result = runner.invoke(cli_app, ["progress"])

    assert result.exit_code == 0
    assert "Current lesson: 4" in result.output
    assert "Completed lessons: 2" in result.output
    assert "No lessons completed yet." not in result.output
    cells = [line.strip(" │|") for line in result.output.splitlines()]
    assert cells.index("1") < cells.index("3")
