"""Type definitions for the Imposter word game."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Phase(Enum):
    """Session phases."""
    SETUP = "setup"  # Building the roster and settings
    CATEGORY = "category"  # Choosing a category
    PASSING = "passing"  # Device handed to the next player, card hidden
    REVEAL = "reveal"  # Current player privately views their card
    STARTER = "starter"  # Announcing who speaks first
    PLAYING = "playing"  # Open discussion
    VOTING = "voting"  # Pass-the-phone ballot
    RESULTS = "results"  # Roles revealed


class Role(Enum):
    """Player roles."""
    CIVILIAN = "civilian"
    IMPOSTER = "imposter"
    JESTER = "jester"
    CONFUSED = "confused"
    ACCOMPLICE = "accomplice"


IMPOSTER_SIDE = (Role.IMPOSTER, Role.ACCOMPLICE)


class Team(Enum):
    """Winning side of a round."""
    CIVILIANS = "civilians"
    IMPOSTERS = "imposters"
    JESTER = "jester"


@dataclass
class Player:
    """A roster entry."""
    id: str
    name: str
    role: Role = Role.CIVILIAN
    has_seen_card: bool = False
    
    @property
    def is_imposter(self) -> bool:
        return self.role == Role.IMPOSTER
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "has_seen_card": self.has_seen_card,
        }


@dataclass
class RoundArtifacts:
    """Values derived once per round.
    
    ``votes`` maps voter id to suspect id, at most one entry per voter.
    """
    secret_word: str = ""
    confused_word: str = ""
    is_troll_round: bool = False
    troll_word: Optional[str] = None
    round_starter_name: Optional[str] = None
    imposter_name: Optional[str] = None
    category_name: Optional[str] = None
    votes: Dict[str, str] = field(default_factory=dict)


@dataclass
class RoleAssignment:
    """Output of the role assignment engine."""
    players: List[Player]
    artifacts: RoundArtifacts
    effective_imposter_count: int


@dataclass(frozen=True)
class VoteTally:
    """Result of counting a ballot.
    
    Attributes:
        counts: Votes received per player id, in roster order
        max_votes: Highest count
        eliminated_id: First player in roster order holding ``max_votes``
        imposter_caught: Whether the eliminated player is on the imposter side
    """
    counts: Dict[str, int]
    max_votes: int
    eliminated_id: str
    eliminated_name: str
    eliminated_role: Role
    imposter_caught: bool
    
    @property
    def decisive(self) -> bool:
        """False when nobody received a vote.
        
        The elimination rule still names the first player in that case; a
        caller deciding winners should treat such a tally as no elimination.
        """
        return self.max_votes > 0
    
    @property
    def tied(self) -> bool:
        return sum(1 for c in self.counts.values() if c == self.max_votes) > 1
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "counts": dict(self.counts),
            "max_votes": self.max_votes,
            "eliminated_id": self.eliminated_id,
            "eliminated_name": self.eliminated_name,
            "imposter_caught": self.imposter_caught,
            "decisive": self.decisive,
        }


@dataclass(frozen=True)
class RoundOutcome:
    """What a finished round reports to the score ledger."""
    round_number: int
    skipped: bool
    is_troll_round: bool
    eliminated_id: Optional[str] = None
    eliminated_name: Optional[str] = None
    vote_counts: Dict[str, int] = field(default_factory=dict)
    imposter_caught: bool = False
    winning_team: Optional[Team] = None
    winners: List[str] = field(default_factory=list)
    losers: List[str] = field(default_factory=list)
    roles: Dict[str, Role] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "skipped": self.skipped,
            "is_troll_round": self.is_troll_round,
            "eliminated_id": self.eliminated_id,
            "eliminated_name": self.eliminated_name,
            "vote_counts": dict(self.vote_counts),
            "imposter_caught": self.imposter_caught,
            "winning_team": self.winning_team.value if self.winning_team else None,
            "winners": list(self.winners),
            "losers": list(self.losers),
            "roles": {name: role.value for name, role in self.roles.items()},
        }


@dataclass(frozen=True)
class CardView:
    """What the current player sees when their card is revealed.
    
    ``shown_role`` is the role the card announces, which differs from the
    real role for a confused player (shown as a civilian) and is None in a
    troll round.
    """
    player_id: str
    player_name: str
    shown_role: Optional[Role]
    word: Optional[str] = None
    category_hint: Optional[str] = None
    partner_name: Optional[str] = None
    is_troll_round: bool = False
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "shown_role": self.shown_role.value if self.shown_role else None,
            "word": self.word,
            "category_hint": self.category_hint,
            "partner_name": self.partner_name,
            "is_troll_round": self.is_troll_round,
        }
