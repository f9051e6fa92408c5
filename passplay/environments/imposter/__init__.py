"""Imposter word game for passplay."""

from passplay.environments.imposter.config import ImposterSettings, load_settings, max_imposters
from passplay.environments.imposter.session import ImposterSession
from passplay.environments.imposter.state import SessionState
from passplay.environments.imposter.types import (
    CardView,
    Phase,
    Player,
    Role,
    RoundArtifacts,
    RoundOutcome,
    Team,
    VoteTally,
)

__all__ = [
    "ImposterSettings",
    "ImposterSession",
    "SessionState",
    "CardView",
    "Phase",
    "Player",
    "Role",
    "RoundArtifacts",
    "RoundOutcome",
    "Team",
    "VoteTally",
    "load_settings",
    "max_imposters",
]
