class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a record is absent or not owned by the caller's tenant.

    The two cases are reported identically so a caller cannot probe for
    records belonging to other tenants.
    """


class DuplicateKeyError(DomainError):
    """Raised when inserting a record whose identifier already exists."""


class InvalidArgumentError(DomainError):
    """Raised for malformed query arguments (paging, sort order, filters)."""


class AuthenticationError(DomainError):
    """Raised when the caller identity is missing."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
