"""Custom exceptions for the choice randomness guard."""

from __future__ import annotations


class ChoiceCheckError(Exception):
    """Base error type for application specific failures."""


class MissingFileError(ChoiceCheckError):
    """Raised when a required input file could not be located."""


class InvalidConfigurationError(ChoiceCheckError):
    """Raised when the configuration file is malformed or invalid."""


class InvalidInputError(ChoiceCheckError):
    """Raised when recorded choices do not meet application constraints."""


class EmptyInputFileError(InvalidInputError):
    """Raised when the input file does not contain any recorded choices."""


class InputTooLargeError(InvalidInputError):
    """Raised when the input file exceeds the supported number of choices."""


class InvalidSymbolError(InvalidInputError):
    """Raised when a choice falls outside the range of selectable options."""


class GameOverError(ChoiceCheckError):
    """Raised when a choice is recorded after the session has terminated."""
