"""Session state for the Imposter word game."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from passplay.environments.imposter.config import ImposterSettings
from passplay.environments.imposter.types import (
    Phase,
    Player,
    Role,
    RoundArtifacts,
    RoundOutcome,
    VoteTally,
)


@dataclass
class SessionState:
    """Complete state of an Imposter session.
    
    Attributes:
        phase: Current phase
        players: Roster, in pass-around order once a round has started
        settings: Session settings
        selected_category_id: Category chosen for the next round
        current_player_index: Player currently holding the device
        artifacts: Values derived for the current round
        round_number: Rounds started in this session
        vote_result: Tally of the last closed ballot (None if skipped)
        outcome: Outcome of the current round once results are shown
    """
    phase: Phase = Phase.SETUP
    players: List[Player] = field(default_factory=list)
    settings: ImposterSettings = field(default_factory=ImposterSettings)
    selected_category_id: Optional[str] = None
    current_player_index: int = 0
    artifacts: RoundArtifacts = field(default_factory=RoundArtifacts)
    round_number: int = 0
    vote_result: Optional[VoteTally] = None
    outcome: Optional[RoundOutcome] = None
    
    @property
    def player_count(self) -> int:
        return len(self.players)
    
    @property
    def current_player(self) -> Optional[Player]:
        """Player at ``current_player_index``, if the roster is non-empty."""
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None
    
    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None
    
    def count_role(self, role: Role) -> int:
        return sum(1 for p in self.players if p.role == role)
    
    def players_with_role(self, role: Role) -> List[Player]:
        return [p for p in self.players if p.role == role]
    
    def all_seen(self) -> bool:
        return bool(self.players) and all(p.has_seen_card for p in self.players)
    
    def all_voted(self) -> bool:
        return bool(self.players) and all(p.id in self.artifacts.votes for p in self.players)
    
    def pending_voters(self) -> List[Player]:
        """Players, in pass order, who have not voted yet."""
        return [p for p in self.players if p.id not in self.artifacts.votes]
    
    def reset_round(self) -> None:
        """Discard everything scoped to a round; keep roster and settings."""
        for player in self.players:
            player.role = Role.CIVILIAN
            player.has_seen_card = False
        self.current_player_index = 0
        self.artifacts = RoundArtifacts()
        self.vote_result = None
        self.outcome = None
    
    def copy(self) -> "SessionState":
        """Create a deep copy of the state."""
        return copy.deepcopy(self)
    
    def to_dict(self, include_roles: bool = False) -> Dict[str, Any]:
        """Convert state to a dictionary.
        
        Args:
            include_roles: Include roles and words (only safe once results are shown)
        """
        players = []
        for p in self.players:
            entry = p.to_dict()
            if not include_roles:
                entry.pop("role")
            players.append(entry)
        
        data = {
            "phase": self.phase.value,
            "players": players,
            "settings": self.settings.to_dict(),
            "selected_category_id": self.selected_category_id,
            "current_player_index": self.current_player_index,
            "round_number": self.round_number,
            "is_troll_round": self.artifacts.is_troll_round,
            "round_starter_name": self.artifacts.round_starter_name,
            "votes_cast": len(self.artifacts.votes),
        }
        if include_roles:
            data["secret_word"] = self.artifacts.secret_word
            data["confused_word"] = self.artifacts.confused_word
            data["troll_word"] = self.artifacts.troll_word
            data["imposter_name"] = self.artifacts.imposter_name
            data["votes"] = dict(self.artifacts.votes)
        if self.vote_result:
            data["vote_result"] = self.vote_result.to_dict()
        if self.outcome:
            data["outcome"] = self.outcome.to_dict()
        return data
