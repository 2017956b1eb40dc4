from __future__ import annotations

import io
from pathlib import Path

import pytest

from choicecheck.__main__ import (
    EXIT_INVALID_CONFIG,
    EXIT_INVALID_INPUT,
    EXIT_MISSING_FILE,
    EXIT_NON_RANDOM,
    EXIT_SUCCESS,
    main,
)


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_cli_random_choices_exit_success(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = _write(tmp_path, "choices.txt", "0 1 2 3 " * 10)

    assert main(["--input", str(input_path)]) == EXIT_SUCCESS
    assert "Result: RANDOM" in capsys.readouterr().out


def test_cli_non_random_choices_end_game(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = _write(tmp_path, "choices.txt", "2\n" * 25)

    assert main(["-i", str(input_path), "-v"]) == EXIT_NON_RANDOM
    output = capsys.readouterr().out
    assert "Result: NON-RANDOM" in output
    assert "P-Value:" in output


def test_cli_missing_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--input", str(tmp_path / "absent.txt")]) == EXIT_MISSING_FILE
    assert "Error:" in capsys.readouterr().err


def test_cli_invalid_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = _write(tmp_path, "choices.txt", "0 1 7")

    assert main(["--input", str(input_path)]) == EXIT_INVALID_INPUT
    assert "Invalid input:" in capsys.readouterr().err


def test_cli_invalid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = _write(tmp_path, "choices.txt", "0 1 2")
    config_path = _write(tmp_path, "config.ini", "[evaluator]\nalpha = 2\n")

    assert main(["-i", str(input_path), "-c", str(config_path)]) == EXIT_INVALID_CONFIG
    assert "Configuration error:" in capsys.readouterr().err


def test_cli_interactive_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("12341234\n"))

    assert main(["--interactive"]) == EXIT_SUCCESS
    assert "Choices: 8/8" in capsys.readouterr().out
