"""Common types shared by every pass-and-play session."""

from enum import Enum, auto
from typing import Any, Dict, Optional
from dataclasses import dataclass


class FailureReason(Enum):
    """Why an intent was rejected.
    
    Every reason is recoverable: the session state is left exactly as it
    was before the rejected intent.
    """
    
    INSUFFICIENT_PLAYERS = auto()
    NO_CATEGORY_SELECTED = auto()
    INVALID_VOTE = auto()
    PHASE_VIOLATION = auto()
    INVALID_PLAYER_NAME = auto()
    UNKNOWN_PLAYER = auto()
    UNKNOWN_CATEGORY = auto()
    INVALID_SETTINGS = auto()


@dataclass(frozen=True)
class IntentResult:
    """Outcome of an intent issued against a session.
    
    Attributes:
        ok: Whether the intent was applied
        reason: Failure reason (None on success)
        message: Human-readable explanation for the UI layer
        payload: Optional value produced by the intent (e.g. a new player id)
    """
    
    ok: bool
    reason: Optional[FailureReason] = None
    message: str = ""
    payload: Any = None
    
    @classmethod
    def success(cls, payload: Any = None, message: str = "") -> "IntentResult":
        return cls(ok=True, payload=payload, message=message)
    
    @classmethod
    def failure(cls, reason: FailureReason, message: str) -> "IntentResult":
        return cls(ok=False, reason=reason, message=message)
    
    def __bool__(self) -> bool:
        return self.ok
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "ok": self.ok,
            "reason": self.reason.name if self.reason else None,
            "message": self.message,
        }

