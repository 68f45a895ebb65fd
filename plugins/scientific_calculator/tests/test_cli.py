"""Smoke tests for the Scientific Calculator CLI."""

from __future__ import annotations

import json
from contextlib import redirect_stdout
from io import StringIO

import pytest

from plugins.scientific_calculator import cli


def _run_cli(args: list[str]) -> dict[str, object]:
    buffer = StringIO()
    with redirect_stdout(buffer):
        cli.main(args)
    return json.loads(buffer.getvalue().strip())


def test_eval_command():
    result = _run_cli(["eval", "sin(30)"])
    assert result["formatted"] == "0.5"

    result = _run_cli(["eval", "1234567.891", "--no-separators"])
    assert result["formatted"] == "1234567.9"


def test_eval_failure_exits_with_error_payload():
    buffer = StringIO()
    with redirect_stdout(buffer), pytest.raises(SystemExit) as excinfo:
        cli.main(["eval", "5/0"])
    assert excinfo.value.code == 1
    assert json.loads(buffer.getvalue())["error"]["kind"] == "Arithmetic"


def test_format_command():
    assert _run_cli(["format", "nan"])["formatted"] == "Error"
    assert _run_cli(["format", "1e15"])["formatted"] == "1.000000e+15"


def test_plot_command():
    result = _run_cli(["plot", "x^2", "--x-min", "-1", "--x-max", "1", "--samples", "3"])
    assert result["series"] == [[-1.0, 1.0], [0.0, 0.0], [1.0, 1.0]]
    assert result["segments"] == 1


def test_bases_and_keys_commands():
    assert _run_cli(["bases", "255"])["bases"]["hex"] == "FF"
    state = _run_cli(["keys", "5", "0", "%"])
    assert state["expression"] == "0.5"
    assert state["display"] == "0.5"
