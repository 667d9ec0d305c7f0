"""
Card issuance use cases (register by email, issue, list) and JSON shaping.
"""

from __future__ import annotations

from typing import Optional

from creditcard_api.db.models import EMAIL_MAX_LENGTH, Card, Person
from creditcard_api.repositories.card_repository import CardRepository
from creditcard_api.repositories.person_repository import PersonRepository

MISSING_EMAIL_QUERY = "O email precisa ser passado como parâmetro."
MISSING_EMAIL_BODY = "insira um email."
EMAIL_TOO_LONG = f"O email deve ter no maximo {EMAIL_MAX_LENGTH} caracteres."


class CardServiceError(Exception):
    """Base exception for card use cases."""


class ValidationError(CardServiceError):
    """Raised when a required field is missing, empty or too long."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def person_to_dict(person: Person) -> dict:
    return {"id": person.id, "email": person.email}


def card_to_dict(card: Card) -> dict:
    return {
        "id": card.id,
        "number": card.number,
        "personId": card.person_id,
        "person": person_to_dict(card.person),
    }


class CardService:
    """Validates input at the boundary and orchestrates both repositories."""

    def __init__(
        self,
        person_repository: Optional[PersonRepository] = None,
        card_repository: Optional[CardRepository] = None,
    ) -> None:
        self.persons = person_repository or PersonRepository()
        self.cards = card_repository or CardRepository()

    @staticmethod
    def normalize_email(value: str | None) -> str:
        return (value or "").strip()

    @staticmethod
    def _check_length(email: str) -> None:
        if len(email) > EMAIL_MAX_LENGTH:
            raise ValidationError(EMAIL_TOO_LONG)

    def register_and_issue(self, email: str | None) -> Card:
        candidate = self.normalize_email(email)
        if not candidate:
            raise ValidationError(MISSING_EMAIL_BODY)
        self._check_length(candidate)
        person = self.persons.ensure_person(Person(email=candidate))
        return self.cards.issue_card(person)

    def cards_for_email(self, email: str | None) -> list[Card]:
        candidate = self.normalize_email(email)
        if not candidate:
            raise ValidationError(MISSING_EMAIL_QUERY)
        self._check_length(candidate)
        return self.cards.find_cards_by_email(candidate)

    def get_card(self, card_id: int) -> Optional[Card]:
        return self.cards.get_card(card_id)
