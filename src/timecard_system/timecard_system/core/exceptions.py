class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or has the wrong shape."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a request carries no valid session token."""


class NotFoundError(DomainError):
    """Raised when a sheet, row, submission or token does not exist."""


class SerializationError(DomainError):
    """Raised when stored sequence data cannot be decoded."""


class UpstreamError(DomainError):
    """Raised when the storage backend fails."""
