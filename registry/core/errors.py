"""Error taxonomy shared by services and repositories."""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for registry exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RegistryError):
    """Raised when input is malformed or out of range."""


class ConflictError(RegistryError):
    """Raised when a uniqueness rule would be violated (email, name+owner)."""


class NotFoundError(RegistryError):
    """Raised when an operation references a record that does not exist."""


class StorageError(RegistryError):
    """Raised when the underlying store fails or a statement matched no row."""
