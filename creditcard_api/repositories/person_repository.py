"""Data access for registered persons."""
from __future__ import annotations

import logging
from typing import Callable, ContextManager, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from creditcard_api.db.models import Person
from creditcard_api.db.session import get_session

from .errors import PersonConflictError, StorageUnavailableError

SessionFactory = Callable[[], ContextManager[Session]]

logger = logging.getLogger(__name__)


class PersonRepository:
    """Finds persons by email and creates them on first registration."""

    def __init__(self, session_factory: SessionFactory = get_session) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _find(session: Session, email: str) -> Optional[Person]:
        stmt = select(Person).where(Person.email == email).order_by(Person.id).limit(1)
        return session.execute(stmt).scalars().first()

    def get_by_email(self, email: str) -> Optional[Person]:
        try:
            with self._session_factory() as session:
                return self._find(session, email)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Could not look up person {email!r}") from exc

    def ensure_person(self, candidate: Person) -> Person:
        """
        Return the stored person for candidate.email, inserting candidate if none exists.

        The found or newly persisted row is returned (with its real id), never
        the transient candidate when a row already existed. When the insert
        loses a race on the unique email constraint the lookup is retried once.
        """
        email = candidate.email
        try:
            with self._session_factory() as session:
                existing = self._find(session, email)
                if existing is not None:
                    return existing
                session.add(candidate)
                try:
                    session.commit()
                except IntegrityError:
                    session.rollback()
                    logger.warning("Concurrent registration for %s, reading back existing row", email)
                    existing = self._find(session, email)
                    if existing is None:
                        raise PersonConflictError(email)
                    return existing
                session.refresh(candidate)
                logger.info("Registered person %s for %s", candidate.id, email)
                return candidate
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Could not register person {email!r}") from exc
