"""Log formats and data structures."""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from datetime import datetime

from passplay.core.utils import safe_json_dumps


class EventType(Enum):
    """Types of loggable session events."""
    
    # Session lifecycle
    SESSION_START = auto()
    SESSION_RESET = auto()
    PHASE_CHANGE = auto()
    ROUND_START = auto()
    ROUND_END = auto()
    
    # Roster and settings
    PLAYER_ADDED = auto()
    PLAYER_REMOVED = auto()
    SETTINGS_UPDATED = auto()
    CATEGORY_SELECTED = auto()
    
    # Round events
    ROLE_ASSIGNMENT = auto()
    CARD_VIEWED = auto()
    CARD_ACKNOWLEDGED = auto()
    ROUND_STARTER = auto()
    VOTE_CAST = auto()
    VOTE_SKIPPED = auto()
    VOTE_TALLY = auto()
    PLAYER_ELIMINATED = auto()
    
    # System events
    ERROR = auto()
    WARNING = auto()
    INFO = auto()


@dataclass
class LogEntry:
    """Single log entry."""
    
    timestamp: datetime
    event_type: EventType
    session_id: str
    round_number: int
    data: Dict[str, Any] = field(default_factory=dict)
    player_id: Optional[str] = None
    is_private: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.name,
            "session_id": self.session_id,
            "round_number": self.round_number,
            "data": self.data,
            "player_id": self.player_id,
            "is_private": self.is_private,
            "metadata": self.metadata,
        }
    
    def to_json(self) -> str:
        """Convert to JSON string."""
        return safe_json_dumps(self.to_dict())
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        """Create from dictionary."""
        data = data.copy()
        data["timestamp"] = datetime.fromisoformat(data["timestamp"])
        data["event_type"] = EventType[data["event_type"]]
        return cls(**data)
