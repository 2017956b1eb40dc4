"""Command line entry point for the choice randomness guard."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .app import ChoiceReplayApp
from .errors import InvalidConfigurationError, InvalidInputError, MissingFileError

EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_MISSING_FILE = 2
EXIT_INVALID_CONFIG = 3
EXIT_INVALID_INPUT = 4
EXIT_NON_RANDOM = 5


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="choicecheck",
        description="Replay player choices and end the game once they stop looking random.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        "-i",
        type=Path,
        help="Path to a text file of recorded choices (integers 0..K-1).",
    )
    source.add_argument(
        "--interactive",
        action="store_true",
        help="Read option keys 1..K from standard input, one battle turn per key.",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Optional INI configuration file tuning the randomness test.",
    )
    parser.add_argument(
        "--report",
        "-r",
        type=Path,
        help="Optional path where a markdown report will be written.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print per group size results and the triggering p-value.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    app = ChoiceReplayApp()
    try:
        if args.interactive:
            result = app.play(
                sys.stdin,
                config_path=args.config,
                report_path=args.report,
                verbose=args.verbose,
            )
        else:
            result = app.run(
                input_path=args.input,
                config_path=args.config,
                report_path=args.report,
                verbose=args.verbose,
            )
    except MissingFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MISSING_FILE
    except InvalidConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG
    except InvalidInputError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except Exception as exc:  # pragma: no cover - defensive guard
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR
    return EXIT_SUCCESS if result.is_random else EXIT_NON_RANDOM


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
