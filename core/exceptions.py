# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated."""


class ConcurrencyError(DomainError):
    """Raised when optimistic locking detects a stale update."""


class AuthenticationError(DomainError):
    """Raised when the acting user cannot be identified (401)."""
    def __init__(self, message: str = "Unauthorized", *, code: str | None = "UNAUTHENTICATED"):
        super().__init__(message, code=code)


class PermissionDeniedError(BusinessRuleError):
    """Raised when an identified user lacks a required permission (403)."""
    def __init__(self, message: str, *, code: str | None = "PERMISSION_DENIED"):
        super().__init__(message, code=code)
