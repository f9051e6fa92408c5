"""passplay - session engine for shared-device social-deduction games."""

__version__ = "0.1.0"

from passplay.core.base_session import BaseSession
from passplay.core.types import FailureReason, IntentResult
from passplay.core.exceptions import (
    PassPlayException,
    ConfigurationError,
    CatalogError,
    InvalidStateError,
)
from passplay.environments.imposter import (
    ImposterSession,
    ImposterSettings,
    Phase,
    Role,
)

__all__ = [
    "__version__",
    "BaseSession",
    "FailureReason",
    "IntentResult",
    "PassPlayException",
    "ConfigurationError",
    "CatalogError",
    "InvalidStateError",
    "ImposterSession",
    "ImposterSettings",
    "Phase",
    "Role",
]
