"""Application orchestration for replaying and playing choice sequences."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, TextIO

from .config import ChoiceCheckConfig, load_config
from .evaluator import Verdict
from .io import read_choice_file
from .keys import symbols_from_keys
from .logging import log_run_result
from .reporting import print_console_summary, print_termination, write_markdown_report
from .session import GameSession


@dataclass(frozen=True)
class RunResult:
    """Summary of a replayed or interactive game."""

    input_path: Path | None
    config_path: Path | None
    total_choices: int
    choices_consumed: int
    verdict: Verdict
    method: str
    num_options: int
    started_at: datetime
    duration: timedelta

    @property
    def is_random(self) -> bool:
        return not self.verdict.terminated

    @property
    def alpha(self) -> float:
        return self.verdict.alpha


class ChoiceReplayApp:
    """High level service wiring configuration, the game session and output."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        input_path: Path,
        config_path: Path | None = None,
        report_path: Path | None = None,
        verbose: bool = False,
    ) -> RunResult:
        """Replay the choices recorded in ``input_path`` one at a time."""

        config = self._load_config(config_path)
        data = read_choice_file(input_path, num_options=config.evaluator.num_options)
        verbose = verbose or config.output.verbose
        result = self._play(
            data.symbols,
            config,
            input_path=input_path,
            config_path=config_path,
            total_choices=data.entry_count,
            verbose=verbose,
        )
        self._finish(result, config, report_path, verbose=verbose)
        return result

    def play(
        self,
        lines: Iterable[str],
        config_path: Path | None = None,
        report_path: Path | None = None,
        verbose: bool = False,
    ) -> RunResult:
        """Read option keys from ``lines`` as the battle screen would.

        Keys ``1`` to ``K`` select an option; anything else is ignored.
        """

        config = self._load_config(config_path)
        num_options = config.evaluator.num_options
        verbose = verbose or config.output.verbose
        print(f"Choose an option with keys 1-{num_options}.", file=self.stream)
        symbols = (
            symbol
            for line in lines
            for symbol in symbols_from_keys(line.strip(), num_options)
        )
        result = self._play(
            symbols,
            config,
            input_path=None,
            config_path=config_path,
            total_choices=None,
            verbose=verbose,
        )
        self._finish(result, config, report_path, verbose=verbose)
        return result

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _load_config(self, path: Path | None) -> ChoiceCheckConfig:
        if path is None:
            return ChoiceCheckConfig()
        config = load_config(path)
        for warning in config.warnings:
            print(f"Warning: {warning}", file=sys.stderr)
        return config

    def _play(
        self,
        symbols: Iterable[int],
        config: ChoiceCheckConfig,
        *,
        input_path: Path | None,
        config_path: Path | None,
        total_choices: int | None,
        verbose: bool,
    ) -> RunResult:
        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()
        session = GameSession(config.evaluator)
        if verbose:
            session.add_listener(lambda event: print_termination(event, stream=self.stream))
        verdict = Verdict(history_length=0, alpha=config.evaluator.alpha)
        consumed = 0
        for symbol in symbols:
            verdict = session.record_choice(symbol)
            consumed += 1
            if session.terminated:
                break
        duration = timedelta(seconds=time.perf_counter() - start)
        return RunResult(
            input_path=input_path,
            config_path=config_path,
            total_choices=total_choices if total_choices is not None else consumed,
            choices_consumed=consumed,
            verdict=verdict,
            method=config.evaluator.method,
            num_options=config.evaluator.num_options,
            started_at=started_at,
            duration=duration,
        )

    def _finish(
        self,
        result: RunResult,
        config: ChoiceCheckConfig,
        report_path: Path | None,
        *,
        verbose: bool,
    ) -> None:
        print_console_summary(result, verbose=verbose, stream=self.stream)
        target = report_path or config.output.report_path
        written: Path | None = None
        if target is not None:
            written = write_markdown_report(result, target)
        if config.logging.enabled:
            log_run_result(
                result,
                written,
                log_path=config.logging.path,
                fmt=config.logging.format,
                retention=config.logging.retention,
            )


__all__ = ["ChoiceReplayApp", "RunResult"]
