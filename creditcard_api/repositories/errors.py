"""Exceptions raised by the persistence layer."""
from __future__ import annotations


class RepositoryError(Exception):
    """Base class for repository failures."""


class StorageUnavailableError(RepositoryError):
    """Raised when a lookup or write could not complete against the store."""


class PersonConflictError(RepositoryError):
    """Raised when a concurrent insert won the email race and the row still cannot be read back."""

    def __init__(self, email: str):
        super().__init__(f"Person with email {email!r} could not be created or found")
        self.email = email
