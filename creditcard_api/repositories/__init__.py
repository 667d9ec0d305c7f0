"""
Persistence adapters.

Repositories hold an explicit session factory and encapsulate every read and
write against the SQL store. Services depend on these classes rather than on
SQLAlchemy sessions.
"""

from .card_repository import CardRepository
from .errors import PersonConflictError, RepositoryError, StorageUnavailableError
from .person_repository import PersonRepository

__all__ = [
    "CardRepository",
    "PersonConflictError",
    "PersonRepository",
    "RepositoryError",
    "StorageUnavailableError",
]
