"""Randomness guard for player choices in a turn-based battle game."""

from .app import ChoiceReplayApp, RunResult
from .evaluator import ALPHA, NUM_OPTIONS, EvaluatorSettings, GroupTrial, RandomnessEvaluator, Verdict
from .history import InputHistory
from .session import Battle, GameSession, TerminationEvent

__all__ = [
    "ALPHA",
    "NUM_OPTIONS",
    "Battle",
    "ChoiceReplayApp",
    "EvaluatorSettings",
    "GameSession",
    "GroupTrial",
    "InputHistory",
    "RandomnessEvaluator",
    "RunResult",
    "TerminationEvent",
    "Verdict",
]
