"""Statistical checks that role assignment is fair in distribution."""

import random
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from scipy import stats as scipy_stats

from passplay.catalog.base import RoleCatalog
from passplay.catalog.memory import InMemoryCatalog
from passplay.environments.imposter.config import ImposterSettings
from passplay.environments.imposter.rules import assign_roles, choose_round_starter
from passplay.environments.imposter.types import Player, Role, RoundOutcome


SIMULATION_COLUMNS = [
    "round", "seat", "name", "role", "pass_position", "is_starter", "is_troll_round",
]


class FairnessAnalyzer:
    """Simulates role assignment and tests it for uniformity.

    Each seat (player in roster order) should become an imposter, a
    special role or the round starter equally often. A biased shuffle,
    such as sorting by a random comparator, shows up here as a low p-value.
    """

    def __init__(
        self,
        n_players: int = 6,
        settings: Optional[ImposterSettings] = None,
        catalog: Optional[RoleCatalog] = None,
        seed: Optional[int] = None,
    ):
        """Initialize fairness analyzer.

        Args:
            n_players: Roster size to simulate
            settings: Settings used for every simulated round
            catalog: Catalog to draw words from
            seed: Random seed for reproducibility
        """
        self.n_players = n_players
        self.settings = settings or ImposterSettings()
        self.catalog = catalog or InMemoryCatalog()
        self.rng = random.Random(seed)
        self.players = [Player(id=f"p{i}", name=f"Player {i + 1}") for i in range(n_players)]

    def simulate(self, n_rounds: int, category_id: Optional[str] = None) -> pd.DataFrame:
        """Assign roles ``n_rounds`` times.

        Args:
            n_rounds: Number of rounds to simulate
            category_id: Category to use (defaults to the catalog's first)

        Returns:
            DataFrame with one row per (round, player): ``round``, ``seat``,
            ``name``, ``role``, ``pass_position``, ``is_starter``, ``is_troll_round``
        """
        if category_id is None:
            category = self.catalog.list_categories()[0]
        else:
            category = self.catalog.get_category(category_id)
        troll_words = self.catalog.get_troll_words()
        seats = {p.id: i for i, p in enumerate(self.players)}

        rows = []
        for round_index in range(n_rounds):
            assignment = assign_roles(self.players, self.settings, category, troll_words, self.rng)
            starter = choose_round_starter(
                assignment.players,
                self.settings,
                assignment.artifacts.is_troll_round,
                self.rng,
            )
            for position, player in enumerate(assignment.players):
                rows.append({
                    "round": round_index,
                    "seat": seats[player.id],
                    "name": player.name,
                    "role": player.role.value,
                    "pass_position": position,
                    "is_starter": player.id == starter.id,
                    "is_troll_round": assignment.artifacts.is_troll_round,
                })

        return pd.DataFrame(rows, columns=SIMULATION_COLUMNS)

    def role_frequencies(self, df: pd.DataFrame) -> pd.DataFrame:
        """Share of rounds in which each seat held each role."""
        table = pd.crosstab(df["seat"], df["role"], normalize="index")
        return table.reindex(columns=[r.value for r in Role], fill_value=0.0)

    def uniformity_test(
        self,
        df: pd.DataFrame,
        column: str = "role",
        value: Any = Role.IMPOSTER.value,
        confidence_level: float = 0.95,
        exclude_troll_rounds: bool = True,
    ) -> Dict[str, Any]:
        """Chi-square test that ``column == value`` is spread evenly over seats.

        Args:
            df: Output of ``simulate``
            column: Column to test (e.g. ``role``, ``is_starter``)
            value: Value to count
            confidence_level: Confidence level for the test
            exclude_troll_rounds: Ignore troll rounds (everyone is an imposter)

        Returns:
            Test results
        """
        if exclude_troll_rounds:
            df = df[~df["is_troll_round"].astype(bool)]

        hits = df[df[column] == value]
        observed = (
            hits.groupby("seat").size()
            .reindex(range(self.n_players), fill_value=0)
            .to_numpy(dtype=float)
        )

        total = observed.sum()
        if total == 0:
            return {
                "observed": observed.tolist(),
                "statistic": 0.0,
                "p_value": 1.0,
                "uniform": True,
                "confidence_level": confidence_level,
            }

        expected = np.full(self.n_players, total / self.n_players)
        statistic, p_value = scipy_stats.chisquare(observed, expected)

        return {
            "observed": observed.tolist(),
            "expected": expected.tolist(),
            "statistic": float(statistic),
            "p_value": float(p_value),
            "uniform": bool(p_value >= (1 - confidence_level)),
            "confidence_level": confidence_level,
        }


def outcomes_to_frame(outcomes: List[RoundOutcome]) -> pd.DataFrame:
    """Tabulate round outcomes, one row per round."""
    rows = []
    for outcome in outcomes:
        rows.append({
            "round": outcome.round_number,
            "skipped": outcome.skipped,
            "is_troll_round": outcome.is_troll_round,
            "eliminated": outcome.eliminated_name,
            "imposter_caught": outcome.imposter_caught,
            "winning_team": outcome.winning_team.value if outcome.winning_team else None,
            "winners": ", ".join(outcome.winners),
        })
    return pd.DataFrame(rows)


def win_rates(outcomes: List[RoundOutcome]) -> pd.DataFrame:
    """Per-player wins, losses and win rate over decided rounds."""
    records: Dict[str, Dict[str, int]] = {}
    for outcome in outcomes:
        if outcome.winning_team is None:
            continue
        for name in outcome.winners:
            records.setdefault(name, {"wins": 0, "losses": 0})["wins"] += 1
        for name in outcome.losers:
            records.setdefault(name, {"wins": 0, "losses": 0})["losses"] += 1

    df = pd.DataFrame.from_dict(records, orient="index", columns=["wins", "losses"])
    if df.empty:
        return df
    df["games"] = df["wins"] + df["losses"]
    df["win_rate"] = np.round(df["wins"] / df["games"], 3)
    return df.sort_index()
