"""Balatro round scorer: core package."""

__version__ = "0.1.0"

from .cards import Card, JokerCard, Round
from .hands import find_best_hand
from .round_io import load_round, read_round
from .scoring import RoundScorer, ScoreResult, score_round, explain
