"""Tests for the randpath command-line interface."""

import json
from pathlib import Path

import pandas as pd
import pytest

from randpath import cli

from tests.conftest import boundary_pairs, split_segments


def test_generate_constrained_paths(capsys):
    cli.main(
        [
            "generate",
            "--nodes", "3",
            "--length", "6",
            "--margin", "1",
            "--method", "constrained",
            "--seed", "5",
            "--count", "2",
        ]
    )
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2
    for line in lines:
        path = json.loads(line)
        assert len(path) == 18
        for segment in split_segments(path, 6):
            assert sorted(segment) == list(range(6))
        for back, front in boundary_pairs(path, 6, 1):
            assert back != front


def test_generate_is_reproducible(capsys):
    args = ["generate", "-n", "2", "-l", "8", "-m", "2", "--seed", "9"]
    cli.main(args)
    first = capsys.readouterr().out
    cli.main(args)
    assert capsys.readouterr().out == first


def test_generate_invalid_parameters_exit_1(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", "--length", "4", "--margin", "3"])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "ERROR: Failed to generate path: InvalidParameterError" in captured.err
    assert captured.out == ""


def test_trend_writes_csv(tmp_path: Path, capsys):
    cli.main(
        [
            "--quiet",
            "trend",
            "--method", "single",
            "--length", "5",
            "--max-iterations", "10",
            "--delta", "3",
            "--notes", "smoke",
            "--seed", "1",
            "--output", str(tmp_path),
        ]
    )
    out_file = tmp_path / "1x5x10x3x10x10xsmoke.csv"
    assert out_file.is_file()
    df = pd.read_csv(out_file)
    assert df["Iterations"].tolist() == [1, 4, 7]
    assert str(out_file) in capsys.readouterr().out


def test_trend_from_config_with_override(tmp_path: Path):
    config = tmp_path / "exp.yaml"
    config.write_text(
        "generator:\n"
        "  node_count: 2\n"
        "  segment_length: 6\n"
        "  margin_length: 1\n"
        "  method: constrained\n"
        "trend:\n"
        "  max_iterations: 5\n"
        "  notes: cfg\n"
        "seed: 3\n"
    )
    cli.main(
        ["trend", "--config", str(config), "--delta", "2", "--output", str(tmp_path)]
    )
    out_file = tmp_path / "0x6x5x2x2x1xcfg.csv"
    assert pd.read_csv(out_file)["Iterations"].tolist() == [1, 3]


def test_trend_missing_config_exit_1(tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["trend", "--config", str(tmp_path / "missing.yaml")])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "ERROR: Experiment file not found" in captured.err
    assert "ERROR" not in captured.out


def test_trend_invalid_experiment_reports_on_stderr(tmp_path: Path, capsys):
    config = tmp_path / "exp.yaml"
    config.write_text("generator:\n  method: 7\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["trend", "--config", str(config), "--output", str(tmp_path)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert "ERROR: Failed to run trend: ValueError" in captured.err
    assert "generator.method" in captured.err
    assert captured.out == ""


def test_no_arguments_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 0
    assert "randpath" in capsys.readouterr().out


def test_unknown_method_is_argparse_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", "--method", "spiral"])
    assert excinfo.value.code == 2
