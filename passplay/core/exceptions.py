"""Custom exceptions for passplay.

Player-facing intents never raise these; they report an ``IntentResult``
instead. Exceptions are reserved for the configuration and catalog
boundaries, where bad input comes from files or code rather than a tap.
"""


class PassPlayException(Exception):
    """Base exception for all passplay errors."""
    
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
    
    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PassPlayException):
    """Raised when settings or a config file are invalid."""
    
    pass


class CatalogError(PassPlayException):
    """Raised when a category or word list cannot be found or parsed."""
    
    pass


class InvalidStateError(PassPlayException):
    """Raised when the session state is internally inconsistent."""
    
    pass
