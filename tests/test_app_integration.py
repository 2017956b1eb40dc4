from __future__ import annotations

import io
import json
from pathlib import Path

from choicecheck.app import ChoiceReplayApp

CONFIG_TEMPLATE = """
[evaluator]
alpha = 0.05
num_options = 4

[logging]
enabled = true
path = logs/games.jsonl
""".strip()


def _write_files(tmp_path: Path, choices: str) -> tuple[Path, Path]:
    config_path = tmp_path / "config.ini"
    config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    data_path = tmp_path / "choices.txt"
    data_path.write_text(choices, encoding="utf-8")
    return data_path, config_path


def test_replay_stops_at_termination_and_logs(tmp_path: Path) -> None:
    input_path, config_path = _write_files(tmp_path, "0 " * 30)
    stream = io.StringIO()
    app = ChoiceReplayApp(stream=stream)

    result = app.run(input_path=input_path, config_path=config_path, verbose=True)

    assert result.is_random is False
    assert result.total_choices == 30
    assert result.choices_consumed == 20
    assert result.verdict.group_size == 1
    assert "P-Value: 0.000000" in stream.getvalue()
    log_lines = (tmp_path / "logs" / "games.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(log_lines[0])["result"] == "NON-RANDOM"


def test_replay_balanced_choices_continue_and_write_report(tmp_path: Path) -> None:
    input_path, config_path = _write_files(tmp_path, "0 1 2 3\n" * 10)
    report_path = tmp_path / "out" / "report.md"
    stream = io.StringIO()

    result = ChoiceReplayApp(stream=stream).run(
        input_path=input_path, config_path=config_path, report_path=report_path
    )

    assert result.is_random is True
    assert result.choices_consumed == 40
    assert result.verdict.trials[0].p_value == 1.0
    assert report_path.exists()
    assert stream.getvalue().startswith("Result: RANDOM | Choices: 40/40")


def test_replay_without_config_uses_defaults(tmp_path: Path) -> None:
    input_path = tmp_path / "choices.txt"
    input_path.write_text("1 2 3", encoding="utf-8")

    result = ChoiceReplayApp(stream=io.StringIO()).run(input_path=input_path)

    assert result.is_random is True
    assert result.config_path is None
    assert result.verdict.trials == ()
    assert not (tmp_path / "logs").exists()


def test_interactive_play_reads_option_keys(tmp_path: Path) -> None:
    lines = ["1111\n", "hello\n", "1" * 20 + "\n", "2222\n"]
    stream = io.StringIO()

    result = ChoiceReplayApp(stream=stream).play(lines)

    assert result.input_path is None
    assert result.choices_consumed == 20
    assert result.is_random is False
    assert stream.getvalue().startswith("Choose an option with keys 1-4.")


def test_interactive_rotation_over_nine_keys_stays_random(tmp_path: Path) -> None:
    config_path = tmp_path / "config.ini"
    config_path.write_text("[evaluator]\nnum_options = 9\n", encoding="utf-8")
    stream = io.StringIO()

    result = ChoiceReplayApp(stream=stream).play(["123456789\n"] * 5, config_path=config_path)

    assert result.choices_consumed == 45
    assert result.verdict.trials[0].frequencies == (5,) * 9
    assert result.is_random is True
    assert stream.getvalue().startswith("Choose an option with keys 1-9.")


def test_interactive_play_without_choices_reports_empty_verdict() -> None:
    result = ChoiceReplayApp(stream=io.StringIO()).play([])

    assert result.choices_consumed == 0
    assert result.verdict.history_length == 0
    assert result.verdict.trials == ()
    assert result.verdict.alpha == 0.05
    assert result.is_random is True
