"""Configuration parsing utilities for the choice randomness guard."""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .errors import InvalidConfigurationError, MissingFileError
from .evaluator import EvaluatorSettings
from .keys import MAX_KEY_OPTIONS
from .stats import DISTRIBUTIONS


@dataclass(frozen=True)
class OutputSection:
    """Options controlling how results should be presented to the user."""

    report_path: Path | None = None
    verbose: bool = False


@dataclass(frozen=True)
class LoggingSection:
    """Options for the structured run log."""

    enabled: bool = False
    path: Path = Path("logs") / "run_log.jsonl"
    format: str = "jsonl"
    retention: int | None = 100


@dataclass(frozen=True)
class ChoiceCheckConfig:
    """Aggregate configuration container returned by :func:`load_config`."""

    evaluator: EvaluatorSettings = field(default_factory=EvaluatorSettings)
    output: OutputSection = field(default_factory=OutputSection)
    logging: LoggingSection = field(default_factory=LoggingSection)
    warnings: Tuple[str, ...] = field(default_factory=tuple)


def load_config(path: Path) -> ChoiceCheckConfig:
    """Load and validate an INI configuration file."""

    parser = configparser.ConfigParser(inline_comment_prefixes=(";", "#"))
    try:
        with path.open("r", encoding="utf-8") as config_file:
            parser.read_file(config_file)
    except FileNotFoundError as exc:
        raise MissingFileError(f"Configuration file not found: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read configuration file: {path}") from exc
    except configparser.Error as exc:
        raise InvalidConfigurationError(f"Configuration is not valid INI: {exc}") from exc

    base_dir = path.resolve().parent
    evaluator_section, warnings = _parse_evaluator(parser)
    return ChoiceCheckConfig(
        evaluator=evaluator_section,
        output=_parse_output(parser, base_dir),
        logging=_parse_logging(parser, base_dir),
        warnings=tuple(warnings),
    )


def _parse_evaluator(parser: configparser.ConfigParser) -> tuple[EvaluatorSettings, list[str]]:
    defaults = EvaluatorSettings()
    warnings: list[str] = []
    if not parser.has_section("evaluator"):
        return defaults, warnings
    section = parser["evaluator"]

    alpha = _get_float(section, "alpha", defaults.alpha)
    if not 0.0 < alpha < 1.0:
        raise InvalidConfigurationError("Option 'alpha' in [evaluator] must be between 0 and 1.")

    num_options = _get_int(section, "num_options", defaults.num_options)
    if not 2 <= num_options <= MAX_KEY_OPTIONS:
        raise InvalidConfigurationError(
            f"Option 'num_options' in [evaluator] must be between 2 and {MAX_KEY_OPTIONS}."
        )

    min_expected = _get_float(section, "min_expected_per_bucket", defaults.min_expected_per_bucket)
    if min_expected <= 0:
        raise InvalidConfigurationError(
            "Option 'min_expected_per_bucket' in [evaluator] must be greater than zero."
        )

    method = section.get("method", defaults.method).strip().lower()
    if method not in DISTRIBUTIONS:
        known = ", ".join(sorted(DISTRIBUTIONS))
        raise InvalidConfigurationError(
            f"Option 'method' in [evaluator] must be one of: {known}."
        )

    step = _get_float(section, "quadrature_step", defaults.quadrature_step)
    if step <= 0:
        raise InvalidConfigurationError(
            "Option 'quadrature_step' in [evaluator] must be greater than zero."
        )
    if "quadrature_step" in section and method != "legacy":
        warnings.append("Option 'quadrature_step' only applies to the legacy method; ignored.")

    settings = EvaluatorSettings(
        alpha=alpha,
        num_options=num_options,
        min_expected_per_bucket=min_expected,
        method=method,
        quadrature_step=step,
    )
    return settings, warnings


def _parse_output(parser: configparser.ConfigParser, base_dir: Path) -> OutputSection:
    if not parser.has_section("output"):
        return OutputSection()
    section = parser["output"]
    report_path: Path | None = None
    raw_report = section.get("report_path", "").strip()
    if raw_report:
        report_path = _resolve_path(raw_report, base_dir)
    verbose = _get_bool(section, "verbose", False)
    return OutputSection(report_path=report_path, verbose=verbose)


def _parse_logging(parser: configparser.ConfigParser, base_dir: Path) -> LoggingSection:
    default_path = (base_dir / "logs" / "run_log.jsonl").resolve()
    if not parser.has_section("logging"):
        return LoggingSection(path=default_path)
    section = parser["logging"]

    enabled = _get_bool(section, "enabled", False)
    raw_path = section.get("path", "").strip()
    log_path = _resolve_path(raw_path, base_dir) if raw_path else default_path

    log_format = section.get("format", "jsonl").strip().lower()
    if log_format not in {"jsonl", "csv"}:
        raise InvalidConfigurationError(
            "Option 'format' in [logging] must be either 'jsonl' or 'csv'."
        )

    retention: int | None = 100
    raw_retention = section.get("retention", "").strip()
    if raw_retention:
        try:
            parsed = int(raw_retention)
        except ValueError as exc:
            raise InvalidConfigurationError(
                "Option 'retention' in [logging] must be an integer value."
            ) from exc
        retention = parsed if parsed > 0 else None

    return LoggingSection(enabled=enabled, path=log_path, format=log_format, retention=retention)


def _resolve_path(raw: str, base_dir: Path) -> Path:
    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.resolve()


def _get_float(section: configparser.SectionProxy, key: str, default: float) -> float:
    if key not in section:
        return default
    try:
        return section.getfloat(key)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section.name}] must be numeric."
        ) from exc


def _get_int(section: configparser.SectionProxy, key: str, default: int) -> int:
    if key not in section:
        return default
    try:
        return section.getint(key)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section.name}] must be an integer value."
        ) from exc


def _get_bool(section: configparser.SectionProxy, key: str, default: bool) -> bool:
    if key not in section:
        return default
    try:
        return section.getboolean(key)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section.name}] must be a boolean value."
        ) from exc


__all__ = [
    "ChoiceCheckConfig",
    "LoggingSection",
    "OutputSection",
    "load_config",
]
