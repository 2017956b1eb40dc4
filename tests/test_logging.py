from __future__ import annotations

import csv
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from choicecheck.app import RunResult
from choicecheck.evaluator import RandomnessEvaluator
from choicecheck.logging import LOG_FIELDNAMES, log_run_result


def _make_run_result(base_dir: Path, *, symbols: list[int] | None = None, idx: int = 0) -> RunResult:
    history = symbols if symbols is not None else [0, 1, 2, 3] * 5
    started_at = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=idx)
    return RunResult(
        input_path=base_dir / f"input-{idx}.txt",
        config_path=None,
        total_choices=len(history),
        choices_consumed=len(history),
        verdict=RandomnessEvaluator().evaluate(history),
        method="exact",
        num_options=4,
        started_at=started_at,
        duration=timedelta(seconds=2),
    )


def test_log_run_result_appends_jsonl(tmp_path: Path) -> None:
    report_path = tmp_path / "report.md"
    result = _make_run_result(tmp_path, symbols=[0] * 20)

    log_file = log_run_result(result, report_path, log_path=tmp_path / "log.jsonl", fmt="jsonl")

    payload = log_file.read_text(encoding="utf-8").strip().splitlines()
    assert len(payload) == 1
    entry = json.loads(payload[0])
    assert entry["result"] == "NON-RANDOM"
    assert entry["choices"] == 20
    assert entry["group_size"] == 1
    assert entry["p_value"] == pytest.approx(result.verdict.p_value)
    assert entry["report_path"] == str(report_path)


def test_log_run_result_without_report_or_trigger(tmp_path: Path) -> None:
    result = _make_run_result(tmp_path)

    log_file = log_run_result(result, log_path=tmp_path / "log.jsonl")

    entry = json.loads(log_file.read_text(encoding="utf-8"))
    assert entry["result"] == "RANDOM"
    assert entry["group_size"] is None
    assert entry["p_value"] is None
    assert entry["report_path"] == ""


def test_log_run_result_enforces_jsonl_retention(tmp_path: Path) -> None:
    log_path = tmp_path / "history.jsonl"

    for idx in range(5):
        log_run_result(_make_run_result(tmp_path, idx=idx), log_path=log_path, retention=3)

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 3
    timestamps = [json.loads(line)["timestamp"] for line in lines]
    assert timestamps == sorted(timestamps)
    assert json.loads(lines[-1])["input_file"].endswith("input-4.txt")


def test_log_run_result_supports_csv_with_retention(tmp_path: Path) -> None:
    log_path = tmp_path / "runs.csv"

    for idx in range(4):
        log_run_result(_make_run_result(tmp_path, idx=idx), log_path=log_path, fmt="csv", retention=2)

    with log_path.open("r", encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 2
    assert list(rows[0]) == list(LOG_FIELDNAMES)
    assert [row["input_file"][-11:] for row in rows] == ["input-2.txt", "input-3.txt"]
    assert rows[0]["result"] == "RANDOM"


def test_log_run_result_rejects_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        log_run_result(_make_run_result(tmp_path), log_path=tmp_path / "x.log", fmt="xml")
