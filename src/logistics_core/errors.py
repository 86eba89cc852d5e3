"""Failure kinds raised by the logistics services."""

from __future__ import annotations


class LogisticsError(Exception):
    """Base class for errors raised by this package."""


class NotFoundError(LogisticsError, LookupError):
    """An id did not resolve against its repository."""

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidArgumentError(LogisticsError, ValueError):
    """A domain invariant was violated."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class AuthenticationError(LogisticsError):
    """Base class for token and credential failures."""


class SignatureInvalidError(AuthenticationError):
    """Token is malformed, tampered with or signed with another secret."""

    def __init__(self, message: str = "token signature is invalid") -> None:
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    """Token signature is valid but its expiration instant has passed."""

    def __init__(self, message: str = "token has expired") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    def __init__(self, message: str = "invalid email or password") -> None:
        super().__init__(message)


class PermissionDeniedError(LogisticsError):
    def __init__(self, role: str, permission: str) -> None:
        self.role = role
        self.permission = permission
        super().__init__(f"role {role} lacks permission '{permission}'")


class StorageError(LogisticsError):
    """Failure reported by a storage backend."""


class ConstraintViolationError(StorageError):
    """A storage-level constraint (such as uniqueness) rejected a write."""
