"""Input helpers for reading recorded player choices from text files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Tuple

from .errors import (
    EmptyInputFileError,
    InputTooLargeError,
    InvalidInputError,
    MissingFileError,
)
from .evaluator import NUM_OPTIONS

DEFAULT_MAX_ENTRIES = 100_000

COMMENT_PREFIX = "#"


@dataclass(frozen=True)
class ChoiceData:
    """Container describing the choices loaded from an input file."""

    symbols: Tuple[int, ...]
    raw_lines: Tuple[str, ...]

    @property
    def entry_count(self) -> int:
        return len(self.symbols)


def read_choice_file(
    path: Path | str,
    *,
    num_options: int = NUM_OPTIONS,
    max_entries: int | None = DEFAULT_MAX_ENTRIES,
) -> ChoiceData:
    """Read whitespace separated choice symbols from ``path``.

    Text after ``#`` on a line is ignored.  Every token must be an integer in
    ``[0, num_options)``.
    """

    candidate = _normalise_path(path)
    if not candidate.exists():
        raise MissingFileError(f"Input file not found: {candidate}")
    try:
        with candidate.open("r", encoding="utf-8", newline="") as handle:
            raw_lines = tuple(handle.readlines())
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read input file: {candidate}") from exc

    symbols = parse_choices(raw_lines, num_options=num_options, source=str(candidate))
    if not symbols:
        raise EmptyInputFileError(f"Input file '{candidate}' does not contain any choices.")
    if max_entries is not None and len(symbols) > max_entries:
        raise InputTooLargeError(
            f"Input file '{candidate}' has {len(symbols)} choices, exceeding the allowed maximum of {max_entries}."
        )
    return ChoiceData(symbols=symbols, raw_lines=raw_lines)


def parse_choices(
    lines: Tuple[str, ...] | list[str],
    *,
    num_options: int = NUM_OPTIONS,
    source: str = "<input>",
) -> Tuple[int, ...]:
    """Parse choice tokens from ``lines`` validating their range."""

    symbols: list[int] = []
    for line_number, line in enumerate(lines, start=1):
        content = line.split(COMMENT_PREFIX, 1)[0]
        for token in content.split():
            try:
                symbol = int(token)
            except ValueError as exc:
                raise InvalidInputError(
                    f"{source}:{line_number}: '{token}' is not an integer choice."
                ) from exc
            if not 0 <= symbol < num_options:
                raise InvalidInputError(
                    f"{source}:{line_number}: choice {symbol} is outside 0..{num_options - 1}."
                )
            symbols.append(symbol)
    return tuple(symbols)


def _normalise_path(path: Path | str) -> Path:
    if isinstance(path, str) and re.match(r"^[A-Za-z]:\\", path):
        return Path(PureWindowsPath(path))
    return Path(path).expanduser().resolve()


__all__ = [
    "ChoiceData",
    "DEFAULT_MAX_ENTRIES",
    "parse_choices",
    "read_choice_file",
]
