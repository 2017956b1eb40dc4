"""Append-only record of the choices made by the player."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, Iterator, List, Tuple


class InputHistory:
    """Ordered, append-only sequence of player choices.

    A history is owned by a :class:`~choicecheck.session.GameSession` and
    outlives individual battles: the randomness test judges the player's
    overall behaviour, not a single encounter.  The history never shrinks or
    reorders, so there is intentionally no way to remove entries.
    """

    __slots__ = ("_symbols",)

    def __init__(self, symbols: Iterable[int] = ()) -> None:
        self._symbols: List[int] = [int(symbol) for symbol in symbols]

    def append(self, symbol: int) -> None:
        """Record ``symbol`` at the end of the history."""

        self._symbols.append(int(symbol))

    def length(self) -> int:
        return len(self._symbols)

    def iterate(self) -> Iterator[int]:
        """Return a fresh iterator over the symbols in insertion order.

        The iterator is bounded by the length at the time of the call so a
        concurrent append never extends a pass that is already running.
        """

        return islice(self._symbols, len(self._symbols))

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[int]:
        return self.iterate()

    def __repr__(self) -> str:
        return f"InputHistory(length={len(self._symbols)})"


__all__ = ["InputHistory"]
