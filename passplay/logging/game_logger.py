"""Session logger for tracking events and intents."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime

from passplay.logging.formats import LogEntry, EventType
from passplay.core.utils import generate_session_id


class GameLogger:
    """Logger for session events.
    
    Handles both in-memory and file-based logging. Role assignments, words
    and card views are logged as private entries so that a public log (the
    one a UI might show on the shared screen) never reveals who is who.
    """
    
    def __init__(
        self,
        session_id: Optional[str] = None,
        output_dir: Optional[Path] = None,
        log_private: bool = True,
        enabled: bool = True,
    ):
        """Initialize game logger.
        
        Args:
            session_id: Unique session identifier
            output_dir: Directory to save logs (None for memory-only)
            log_private: Whether to log private information (default: True)
            enabled: Whether logging is enabled
        """
        self.session_id = session_id or generate_session_id()
        self.output_dir = Path(output_dir) if output_dir else None
        self.log_private = log_private
        self.enabled = enabled
        
        self.entries: List[LogEntry] = []
        self.current_round = 0
        
        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.output_dir / f"{self.session_id}.jsonl"
        else:
            self.log_file = None
    
    def log(
        self,
        event_type: EventType,
        data: Dict[str, Any],
        player_id: Optional[str] = None,
        is_private: bool = False,
        **metadata
    ) -> None:
        """Log an event.
        
        Args:
            event_type: Type of event
            data: Event data
            player_id: Player associated with event (if any)
            is_private: Whether this is private information
            **metadata: Additional metadata
        """
        if not self.enabled:
            return
        
        if is_private and not self.log_private:
            return
        
        entry = LogEntry(
            timestamp=datetime.now(),
            event_type=event_type,
            session_id=self.session_id,
            round_number=self.current_round,
            data=data,
            player_id=player_id,
            is_private=is_private,
            metadata=metadata
        )
        
        self.entries.append(entry)
        
        if self.log_file:
            self._write_to_file(entry)
    
    def _write_to_file(self, entry: LogEntry) -> None:
        try:
            with open(self.log_file, 'a') as f:
                f.write(entry.to_json() + '\n')
        except OSError as e:
            print(f"Warning: Failed to write log entry: {e}")
    
    def log_session_start(self, settings: Dict[str, Any]) -> None:
        """Log session start.
        
        Args:
            settings: Initial session settings
        """
        self.log(EventType.SESSION_START, {"settings": settings})
    
    def log_phase_change(self, old_phase: str, new_phase: str) -> None:
        """Log phase change.
        
        Args:
            old_phase: Previous phase
            new_phase: New phase
        """
        self.log(
            EventType.PHASE_CHANGE,
            {"old_phase": old_phase, "new_phase": new_phase}
        )
    
    def log_round_start(self, round_number: int, data: Optional[Dict[str, Any]] = None) -> None:
        """Log round start.
        
        Args:
            round_number: Round number
            data: Public round data (never roles or words)
        """
        self.current_round = round_number
        payload = {"round": round_number}
        payload.update(data or {})
        self.log(EventType.ROUND_START, payload)
    
    def log_round_end(self, outcome: Dict[str, Any]) -> None:
        """Log round end with its public outcome."""
        self.log(EventType.ROUND_END, {"outcome": outcome})
    
    def log_rejection(self, intent: str, reason: str, message: str) -> None:
        """Log an intent that was rejected by a guard.
        
        Args:
            intent: Name of the rejected intent
            reason: FailureReason name
            message: Explanation reported to the caller
        """
        self.log(
            EventType.WARNING,
            {"intent": intent, "reason": reason, "message": message}
        )
    
    def log_error(self, error_type: str, message: str, details: Optional[Dict] = None) -> None:
        """Log error.
        
        Args:
            error_type: Type of error
            message: Error message
            details: Additional details
        """
        self.log(
            EventType.ERROR,
            {
                "error_type": error_type,
                "message": message,
                "details": details or {}
            }
        )
    
    def get_entries(
        self,
        event_type: Optional[EventType] = None,
        player_id: Optional[str] = None,
        include_private: bool = False
    ) -> List[LogEntry]:
        """Get log entries with optional filtering.
        
        Args:
            event_type: Filter by event type
            player_id: Filter by player ID
            include_private: Include private entries
            
        Returns:
            Filtered list of log entries
        """
        entries = self.entries
        
        if event_type:
            entries = [e for e in entries if e.event_type == event_type]
        
        if player_id is not None:
            entries = [e for e in entries if e.player_id == player_id]
        
        if not include_private:
            entries = [e for e in entries if not e.is_private]
        
        return entries
    
    def export_to_json(self, filepath: Path, include_private: bool = False) -> None:
        """Export logs to JSON file.
        
        Args:
            filepath: Output file path
            include_private: Include private entries
        """
        entries = self.get_entries(include_private=include_private)
        data = [entry.to_dict() for entry in entries]
        
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)
    
    def get_stats(self) -> Dict[str, Any]:
        """Get logging statistics."""
        return {
            "session_id": self.session_id,
            "total_entries": len(self.entries),
            "current_round": self.current_round,
            "private_entries": sum(1 for e in self.entries if e.is_private),
            "event_type_counts": self._count_event_types(),
        }
    
    def _count_event_types(self) -> Dict[str, int]:
        counts = {}
        for entry in self.entries:
            event_name = entry.event_type.name
            counts[event_name] = counts.get(event_name, 0) + 1
        return counts
    
    def clear(self) -> None:
        """Clear all log entries."""
        self.entries.clear()
        self.current_round = 0
