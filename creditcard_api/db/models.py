"""SQLAlchemy models for registered persons and their issued cards."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from creditcard_api.domain.card_numbers import CARD_NUMBER_LENGTH

from .session import Base

EMAIL_MAX_LENGTH = 255


class Person(Base):
    __tablename__ = "persons"
    __table_args__ = (UniqueConstraint("email", name="uq_persons_email"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(EMAIL_MAX_LENGTH), nullable=False)

    cards = relationship("Card", back_populates="person", lazy="raise")

    def __repr__(self) -> str:
        return f"<Person {self.id} {self.email}>"


class Card(Base):
    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(String(CARD_NUMBER_LENGTH), nullable=False)
    person_id = Column(Integer, ForeignKey("persons.id"), nullable=False, index=True)

    # loaded explicitly by CardRepository, never lazily
    person = relationship("Person", back_populates="cards", lazy="raise")

    def __repr__(self) -> str:
        return f"<Card {self.id} person={self.person_id}>"
