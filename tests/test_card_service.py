from __future__ import annotations

import pytest

from creditcard_api.domain.card_numbers import is_valid_card_number
from creditcard_api.services.card_service import (
    EMAIL_TOO_LONG,
    MISSING_EMAIL_BODY,
    MISSING_EMAIL_QUERY,
    CardService,
    ValidationError,
    card_to_dict,
)


@pytest.mark.parametrize("email", [None, "", "   "])
def test_register_and_issue_rejects_empty_email_without_writing(temp_db, person_count, email):
    svc = CardService()
    with pytest.raises(ValidationError) as excinfo:
        svc.register_and_issue(email)
    assert excinfo.value.message == MISSING_EMAIL_BODY
    assert person_count("") == 0
    assert person_count("   ") == 0


@pytest.mark.parametrize("email", [None, ""])
def test_cards_for_email_requires_email(temp_db, email):
    with pytest.raises(ValidationError) as excinfo:
        CardService().cards_for_email(email)
    assert excinfo.value.message == MISSING_EMAIL_QUERY


def test_register_twice_reuses_person(temp_db, person_count):
    svc = CardService()
    first = svc.register_and_issue("hank@example.com")
    second = svc.register_and_issue("hank@example.com")

    assert first.id != second.id
    assert first.person_id == second.person_id
    assert person_count("hank@example.com") == 1
    assert [c.id for c in svc.cards_for_email("hank@example.com")] == [first.id, second.id]


def test_email_is_stripped_before_use(temp_db):
    svc = CardService()
    card = svc.register_and_issue("  ivy@example.com ")
    assert card.person.email == "ivy@example.com"
    assert len(svc.cards_for_email(" ivy@example.com")) == 1


def test_card_to_dict_shape(temp_db):
    card = CardService().register_and_issue("jack@example.com")
    data = card_to_dict(card)

    assert set(data) == {"id", "number", "personId", "person"}
    assert data["id"] == card.id
    assert is_valid_card_number(data["number"])
    assert data["personId"] == card.person_id
    assert data["person"] == {"id": card.person_id, "email": "jack@example.com"}


def test_get_card_returns_none_for_unknown_id(temp_db):
    assert CardService().get_card(404) is None


def test_overlong_email_is_a_validation_error(temp_db, person_count):
    svc = CardService()
    email = "a" * 250 + "@x.com"

    with pytest.raises(ValidationError) as excinfo:
        svc.register_and_issue(email)
    assert excinfo.value.message == EMAIL_TOO_LONG
    with pytest.raises(ValidationError):
        svc.cards_for_email(email)
    assert person_count(email) == 0


def test_email_at_column_limit_is_accepted(temp_db):
    email = "b" * 249 + "@x.com"
    assert len(email) == 255
    card = CardService().register_and_issue(email)
    assert card.person.email == email
