"""Unified logging system for passplay sessions."""

from passplay.logging.game_logger import GameLogger
from passplay.logging.formats import LogEntry, EventType

__all__ = [
    "GameLogger",
    "LogEntry",
    "EventType",
]
