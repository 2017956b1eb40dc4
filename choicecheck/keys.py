"""Mapping from battle-screen key presses to choice symbols."""

from __future__ import annotations

from typing import Iterable, Iterator

from .evaluator import NUM_OPTIONS

MAX_KEY_OPTIONS = 9
"""Option keys run from '1' to '9', so no more options can be selected."""


def symbol_for_key(key: str, num_options: int = NUM_OPTIONS) -> int | None:
    """Return the symbol for option key ``'1'..str(num_options)``.

    Any other key is not an option and yields ``None``.
    """

    if len(key) != 1 or not "1" <= key <= str(MAX_KEY_OPTIONS):
        return None
    symbol = ord(key) - ord("1")
    if symbol >= num_options:
        return None
    return symbol


def symbols_from_keys(keys: Iterable[str], num_options: int = NUM_OPTIONS) -> Iterator[int]:
    """Yield the symbols for the option keys in ``keys``, skipping the rest."""

    for key in keys:
        symbol = symbol_for_key(key, num_options)
        if symbol is not None:
            yield symbol


__all__ = ["MAX_KEY_OPTIONS", "symbol_for_key", "symbols_from_keys"]
