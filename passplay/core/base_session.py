"""Base session class for pass-and-play game variants."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional
import random

from passplay.core.exceptions import InvalidStateError
from passplay.core.types import FailureReason, IntentResult
from passplay.core.utils import generate_session_id


class BaseSession(ABC):
    """Abstract base class for a shared-device game session.
    
    A session owns its state and its random source, and moves between
    phases only along the edges declared in ``TRANSITIONS``. Every variant
    (word game, drawing game) subclasses this and exposes its own intents;
    guard failures are reported as ``IntentResult`` failures and never
    mutate state.
    
    Subclasses must set ``TRANSITIONS`` and store the current phase on
    ``self.state.phase``.
    """
    
    TRANSITIONS: Dict[Enum, FrozenSet[Enum]] = {}
    
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        logger=None,
        session_id: Optional[str] = None,
    ):
        """Initialize session.
        
        Args:
            rng: Random source (a test harness injects a deterministic one)
            seed: Seed for a fresh random source, ignored when ``rng`` is given
            logger: Optional GameLogger instance
            session_id: Unique identifier (auto-generated if None)
        """
        self.rng = rng or random.Random(seed)
        self.logger = logger
        if session_id:
            self.session_id = session_id
        elif logger:
            self.session_id = logger.session_id
        else:
            self.session_id = generate_session_id(self.__class__.__name__.lower())
        
        self.state: Any = None
        self.phase_history: List[Enum] = []
        self.reset()
    
    @abstractmethod
    def reset(self) -> None:
        """Reset the session to its initial state."""
        pass
    
    @property
    def phase(self) -> Enum:
        return self.state.phase
    
    def can_transition(self, target: Enum) -> bool:
        """Check whether ``target`` is reachable from the current phase."""
        return target in self.TRANSITIONS.get(self.state.phase, frozenset())
    
    def _transition(self, target: Enum) -> None:
        """Move to ``target``, which must be a declared edge.
        
        Callers check guards first; reaching an undeclared edge here means
        an intent handler is wrong, not that the player did something odd.
        
        Raises:
            InvalidStateError: If the edge is not in the transition table
        """
        current = self.state.phase
        if not self.can_transition(target):
            raise InvalidStateError(
                f"Illegal transition {current.value} -> {target.value}",
                details={"session_id": self.session_id}
            )
        self.phase_history.append(current)
        self.state.phase = target
        if self.logger:
            self.logger.log_phase_change(current.value, target.value)
    
    def _require_phase(self, intent: str, *phases: Enum) -> Optional[IntentResult]:
        """Return a PHASE_VIOLATION failure unless the session is in ``phases``."""
        if self.state.phase in phases:
            return None
        allowed = ", ".join(p.value for p in phases)
        return self._reject(
            intent,
            FailureReason.PHASE_VIOLATION,
            f"'{intent}' is not allowed during {self.state.phase.value} (allowed: {allowed})"
        )
    
    def _reject(self, intent: str, reason: FailureReason, message: str) -> IntentResult:
        if self.logger:
            self.logger.log_rejection(intent, reason.name, message)
        return IntentResult.failure(reason, message)
    
    def _log(self, event_type, data: Dict[str, Any], **kwargs) -> None:
        if self.logger:
            self.logger.log(event_type, data, **kwargs)
    
    def __str__(self) -> str:
        """String representation of the session."""
        return f"{self.__class__.__name__}(session_id={self.session_id}, phase={self.state.phase.value})"
