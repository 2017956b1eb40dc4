"""Reporting utilities for console and markdown output."""

from __future__ import annotations

import re
import sys
import textwrap
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from string import Template
from typing import Sequence, TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from datetime import timedelta
    from .app import RunResult
    from .evaluator import GroupTrial
    from .session import TerminationEvent


@dataclass(frozen=True)
class ReportTemplate:
    """Container for the markdown report template."""

    template: Template = Template(
        textwrap.dedent(
            """
            # Choice Randomness Report

            ## Summary
            ${summary}

            ## Session
            ${session}

            ## Group Size Trials
            ${trial_table}
            ${frequency_notes}
            _Generated on ${timestamp} (duration: ${duration})._
            """
        ).strip()
    )


DEFAULT_TEMPLATE = ReportTemplate()

MAX_LISTED_BUCKETS = 16


def print_termination(event: "TerminationEvent", *, stream: TextIO | None = None) -> None:
    """Diagnostic hook printing the p-value that ended the game."""

    output = stream if stream is not None else sys.stdout
    print(f"P-Value: {event.p_value:.6f}", file=output)


def print_console_summary(result: "RunResult", *, verbose: bool = False, stream: TextIO | None = None) -> None:
    """Print a short summary of the game to ``stream``."""

    output = stream if stream is not None else sys.stdout
    status = "RANDOM" if result.is_random else "NON-RANDOM"
    print(f"Result: {status} | Choices: {result.choices_consumed}/{result.total_choices}", file=output)
    verdict = result.verdict
    if verdict.terminated:
        print(
            f"Game over at choice {verdict.history_length}: group size {verdict.group_size}, "
            f"p-value {verdict.p_value:.6f}",
            file=output,
        )
    if not verbose:
        return

    print(f"Method: {result.method} | Options: {result.num_options}", file=output)
    if not verdict.trials:
        print(" - no group size evaluated yet", file=output)
    for trial in verdict.trials:
        outcome = "REJECT" if trial.rejected else "pass"
        print(
            f" - group size {trial.group_size}: chi-squared {trial.chi_squared:.3f} "
            f"(dof {trial.degrees_of_freedom}), p-value {trial.p_value:.6f} [{outcome}]",
            file=output,
        )
    print(f"Alpha: {result.alpha:.4f}", file=output)


def build_markdown_report(result: "RunResult", *, template: Template | None = None) -> str:
    """Generate a markdown report for ``result`` using ``template``."""

    template = template or DEFAULT_TEMPLATE.template
    timestamp = result.started_at.astimezone(timezone.utc).isoformat()
    return template.substitute(
        summary=_format_summary_section(result),
        session=_format_session_section(result),
        trial_table=_format_trial_table(result.verdict.trials),
        frequency_notes=_format_frequency_notes(result.verdict.trials, result.num_options),
        timestamp=timestamp,
        duration=_format_duration(result.duration),
    )


def write_markdown_report(
    result: "RunResult",
    path: Path | None = None,
    *,
    template: Template | None = None,
) -> Path:
    """Render and persist a markdown report for ``result``."""

    target = _resolve_report_path(result, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    content = build_markdown_report(result, template=template)
    target.write_text(content, encoding="utf-8")
    return target


def format_group(index: int, group_size: int, num_options: int) -> str:
    """Render bucket ``index`` as the option keys of its window, e.g. ``'1-4'``."""

    digits: list[str] = []
    for _ in range(group_size):
        index, digit = divmod(index, num_options)
        digits.append(str(digit + 1))
    return "-".join(reversed(digits))


# ---------------------------------------------------------------------------
# Helper formatting utilities
# ---------------------------------------------------------------------------

def _format_summary_section(result: "RunResult") -> str:
    verdict = result.verdict
    lines = [
        f"- **Result:** {'RANDOM' if result.is_random else 'NON-RANDOM'}",
        f"- **Significance level:** {result.alpha:.4f}",
    ]
    if verdict.terminated:
        lines.append(f"- **Triggering group size:** {verdict.group_size}")
        lines.append(f"- **Triggering p-value:** {verdict.p_value:.6f}")
    return "\n".join(lines)


def _format_session_section(result: "RunResult") -> str:
    source = str(result.input_path) if result.input_path is not None else "interactive"
    config = str(result.config_path) if result.config_path is not None else "defaults"
    lines = [
        f"- **Input:** {source}",
        f"- **Configuration:** {config}",
        f"- **Choices replayed:** {result.choices_consumed} of {result.total_choices}",
        f"- **Options:** {result.num_options}",
        f"- **p-value method:** {result.method}",
    ]
    return "\n".join(lines)


def _format_trial_table(trials: Sequence["GroupTrial"]) -> str:
    header = "| Group size | Buckets | Windows | Chi-squared | DoF | P-Value | Outcome |"
    separator = "| --- | --- | --- | --- | --- | --- | --- |"
    rows = [
        "| {} | {} | {} | {:.3f} | {} | {:.6f} | {} |".format(
            trial.group_size,
            trial.bucket_count,
            trial.window_count,
            trial.chi_squared,
            trial.degrees_of_freedom,
            trial.p_value,
            "REJECT" if trial.rejected else "PASS",
        )
        for trial in trials
    ]
    if not rows:
        rows.append("| _(history too short)_ | - | - | - | - | - | - |")
    return "\n".join([header, separator, *rows])


def _format_frequency_notes(trials: Sequence["GroupTrial"], num_options: int) -> str:
    sections: list[str] = []
    for trial in trials:
        if trial.bucket_count > MAX_LISTED_BUCKETS:
            continue
        counts = ", ".join(
            f"{format_group(index, trial.group_size, num_options)}: {count}"
            for index, count in enumerate(trial.frequencies)
        )
        sections.append(f"### Group size {trial.group_size}\n{counts}")
    if not sections:
        return "\n"
    return "\n\n" + "\n\n".join(sections) + "\n\n"


def _format_duration(duration: "timedelta") -> str:
    total_seconds = duration.total_seconds()
    if total_seconds < 1:
        return f"{total_seconds * 1000:.0f} ms"
    return f"{total_seconds:.2f} s"


def _resolve_report_path(result: "RunResult", path: Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser().resolve()
    base_dir = Path("reports")
    stem = result.input_path.stem if result.input_path is not None else "interactive"
    safe_stem = re.sub(r"[^A-Za-z0-9_.-]+", "-", stem).strip("-") or "game"
    timestamp = result.started_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return (base_dir / f"{safe_stem}-{timestamp}.md").resolve()


__all__ = [
    "ReportTemplate",
    "build_markdown_report",
    "format_group",
    "print_console_summary",
    "print_termination",
    "write_markdown_report",
]
