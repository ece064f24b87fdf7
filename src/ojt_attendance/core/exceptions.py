class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when settings cannot be turned into a working engine."""
