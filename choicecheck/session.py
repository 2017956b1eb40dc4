"""Game-state context tying the choice history to the randomness evaluator."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List

from .errors import GameOverError, InvalidSymbolError
from .evaluator import EvaluatorSettings, RandomnessEvaluator, Verdict
from .history import InputHistory


@dataclass(frozen=True)
class TerminationEvent:
    """Signal that the game ends because the player's choices are not random."""

    p_value: float
    group_size: int
    history_length: int
    verdict: Verdict


TerminationListener = Callable[[TerminationEvent], None]


class GameSession:
    """Owns the input history for the lifetime of a game.

    The history is shared by every battle started from the session.  Each
    recorded choice is followed by exactly one evaluation pass; both happen
    under a single lock so the evaluation always sees the append that
    triggered it.
    """

    def __init__(
        self,
        settings: EvaluatorSettings | None = None,
        *,
        evaluator: RandomnessEvaluator | None = None,
        history: InputHistory | None = None,
    ) -> None:
        if settings is not None and evaluator is not None:
            raise ValueError("Pass either settings or an evaluator, not both.")
        self.evaluator = evaluator or RandomnessEvaluator(settings)
        self.history = history if history is not None else InputHistory()
        self._listeners: List[TerminationListener] = []
        self._lock = threading.Lock()
        self._termination: TerminationEvent | None = None
        self._battles = 0

    @property
    def num_options(self) -> int:
        return self.evaluator.settings.num_options

    @property
    def terminated(self) -> bool:
        return self._termination is not None

    @property
    def termination(self) -> TerminationEvent | None:
        return self._termination

    def add_listener(self, listener: TerminationListener) -> None:
        """Register ``listener`` to be called when the game must end."""

        self._listeners.append(listener)

    def remove_listener(self, listener: TerminationListener) -> None:
        self._listeners.remove(listener)

    def record_choice(self, symbol: int) -> Verdict:
        """Append ``symbol`` to the history and evaluate the result."""

        if not 0 <= symbol < self.num_options:
            raise InvalidSymbolError(
                f"Choice {symbol} is outside the selectable range 0..{self.num_options - 1}."
            )
        with self._lock:
            if self._termination is not None:
                raise GameOverError("The game already ended; no further choices are accepted.")
            self.history.append(symbol)
            verdict = self.evaluator.evaluate(self.history)
            if verdict.terminated:
                self._termination = TerminationEvent(
                    p_value=verdict.p_value,
                    group_size=verdict.group_size,
                    history_length=verdict.history_length,
                    verdict=verdict,
                )
                event = self._termination
            else:
                event = None
        if event is not None:
            for listener in list(self._listeners):
                listener(event)
        return verdict

    def start_battle(self) -> "Battle":
        """Begin a battle that records into this session's shared history."""

        self._battles += 1
        return Battle(self, number=self._battles)


class Battle:
    """A single encounter; choices land in the session-wide history."""

    def __init__(self, session: GameSession, *, number: int) -> None:
        self.session = session
        self.number = number
        self.choices = 0

    def take_turn(self, symbol: int) -> Verdict:
        verdict = self.session.record_choice(symbol)
        self.choices += 1
        return verdict

    def __repr__(self) -> str:
        return f"Battle(number={self.number}, choices={self.choices})"


__all__ = ["Battle", "GameSession", "TerminationEvent", "TerminationListener"]
