"""Core framework components for passplay."""

from passplay.core.base_session import BaseSession
from passplay.core.types import FailureReason, IntentResult
from passplay.core.exceptions import (
    PassPlayException,
    ConfigurationError,
    CatalogError,
    InvalidStateError,
)
from passplay.core.utils import generate_id

__all__ = [
    "BaseSession",
    "FailureReason",
    "IntentResult",
    "PassPlayException",
    "ConfigurationError",
    "CatalogError",
    "InvalidStateError",
    "generate_id",
]
