"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from mandelbrot_plot.cli.main import ASCII_RAMP, main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("VIEW", "MAX_ITERATIONS", "SEED_MODE", "COLOR"):
        monkeypatch.delenv("MANDELBROT_" + name, raising=False)


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "Mandelbrot Plot v" in result.output


def test_render_preview(runner):
    result = runner.invoke(main, ["render", "--width", "5", "--height", "5"])
    assert result.exit_code == 0

    lines = result.output.splitlines()
    assert len(lines) == 5
    assert all(len(line) == 5 for line in lines)
    # Row through the real axis: three points inside, two escaping
    assert lines[2][:3] == ASCII_RAMP[-1] * 3
    assert lines[0][0] == ASCII_RAMP[0]


def test_render_with_navigation(runner):
    result = runner.invoke(main, ["render", "-w", "8", "-h", "4", "--center", "4", "2",
                                  "--zoom", "0.5", "--max-iter", "32"])
    assert result.exit_code == 0
    assert len(result.output.splitlines()) == 4


def test_render_rejects_bad_cap(runner):
    result = runner.invoke(main, ["render", "--max-iter", "300"])
    assert result.exit_code == 1
    assert "max_iterations" in result.output


def test_render_rejects_bad_view(runner):
    result = runner.invoke(main, ["render", "--view", "1,2"])
    assert result.exit_code == 1
    assert "Invalid view" in result.output


def test_info(runner):
    result = runner.invoke(main, ["info", "-w", "4", "-h", "4", "--center", "0", "0", "--zoom", "0.5"])
    assert result.exit_code == 0

    info = json.loads(result.output)
    assert info["view"] == {"left": -3.0, "top": -3.0, "width": 2.0, "height": 2.0}
    assert info["state"] == "configured"


def test_info_uses_environment(runner, monkeypatch):
    monkeypatch.setenv("MANDELBROT_MAX_ITERATIONS", "64")
    result = runner.invoke(main, ["info", "-w", "4", "-h", "4"])
    assert result.exit_code == 0
    assert json.loads(result.output)["max_iterations"] == 64


def test_benchmark(runner):
    result = runner.invoke(main, ["benchmark", "-w", "16", "-h", "16", "--frames", "3"])
    assert result.exit_code == 0
    assert "Frames per Second:" in result.output
    assert "avg of last" in result.output


def test_benchmark_rejects_no_frames(runner):
    result = runner.invoke(main, ["benchmark", "--frames", "0"])
    assert result.exit_code == 1
