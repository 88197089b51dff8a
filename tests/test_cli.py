#!filepath: tests/test_cli.py
from typer.testing import CliRunner

from progress_logger import __version__
from progress_logger.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_demo_all_modes():
    result = runner.invoke(app, ["demo", "1000", "--frequency", "0.1"])
    assert result.exit_code == 0, result.output
    for mode in ("light", "full", "up"):
        assert f"{mode} updates" in result.stdout


def test_demo_single_mode():
    result = runner.invoke(app, ["demo", "10", "--mode", "light", "--items", "rows"])
    assert result.exit_code == 0, result.output
    assert "light updates" in result.stdout
    assert "full updates" not in result.stdout


def test_demo_rejects_negative_n():
    result = runner.invoke(app, ["demo", "-5"])
    assert result.exit_code != 0
