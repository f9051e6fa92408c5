"""Analysis and simulation tools."""

from passplay.analysis.fairness import FairnessAnalyzer, outcomes_to_frame, win_rates
from passplay.analysis.simulation import play_random_round, play_random_rounds

__all__ = [
    "FairnessAnalyzer",
    "outcomes_to_frame",
    "win_rates",
    "play_random_round",
    "play_random_rounds",
]
