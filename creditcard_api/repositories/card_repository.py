"""Data access for issued cards."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, contains_eager, joinedload

from creditcard_api.core.logging_config import mask_number
from creditcard_api.db.models import Card, Person
from creditcard_api.db.session import get_session
from creditcard_api.domain.card_numbers import default_generator, is_valid_card_number

from .errors import StorageUnavailableError
from .person_repository import SessionFactory

logger = logging.getLogger(__name__)


class CardRepository:
    """Issues cards for persons and queries them by owner email."""

    def __init__(
        self,
        session_factory: SessionFactory = get_session,
        generator: Callable[[], str] = default_generator,
    ) -> None:
        self._session_factory = session_factory
        self._generator = generator

    @staticmethod
    def _load(session: Session, card_id: int) -> Optional[Card]:
        stmt = (
            select(Card)
            .options(joinedload(Card.person))
            .where(Card.id == card_id)
            .execution_options(populate_existing=True)
        )
        return session.execute(stmt).scalars().first()

    def issue_card(self, owner: Person) -> Card:
        """Generate a number, persist a card for owner and return it with its id and owner."""
        number = self._generator()
        if not is_valid_card_number(number):
            raise ValueError(f"Generator produced an invalid card number: {mask_number(number)!r}")
        card = Card(number=number, person_id=owner.id)
        try:
            with self._session_factory() as session:
                session.add(card)
                session.commit()
                issued = self._load(session, card.id)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Could not issue card for person {owner.id}") from exc
        logger.info("Issued card %s (%s) for person %s", issued.id, mask_number(issued.number), owner.id)
        return issued

    def find_cards_by_email(self, email: str) -> list[Card]:
        """All cards whose owner has exactly this email, oldest first; empty when none match."""
        stmt = (
            select(Card)
            .join(Person, Person.id == Card.person_id)
            .options(contains_eager(Card.person))
            .where(Person.email == email)
            .order_by(Card.id)
        )
        try:
            with self._session_factory() as session:
                return list(session.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Could not list cards for {email!r}") from exc

    def get_card(self, card_id: int) -> Optional[Card]:
        try:
            with self._session_factory() as session:
                return self._load(session, card_id)
        except SQLAlchemyError as exc:
            raise StorageUnavailableError(f"Could not load card {card_id}") from exc
