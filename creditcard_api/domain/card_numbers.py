"""Card number generation."""
from __future__ import annotations

import random
import re
import threading

CARD_NUMBER_LENGTH = 16

DIGITS = "0123456789"
CARD_NUMBER_PATTERN = re.compile(r"[0-9]{%d}" % CARD_NUMBER_LENGTH)


class CardNumberGenerator:
    """
    Produces 16-digit numeric strings, each digit drawn uniformly.

    Not meant for real payment cards: no Luhn digit, no BIN range and no
    uniqueness check against numbers already issued.
    """

    def __init__(self, rng: random.Random | None = None, *, seed: int | None = None) -> None:
        if rng is None:
            rng = random.Random(seed)
        self._rng = rng
        self._lock = threading.Lock()

    def generate(self) -> str:
        with self._lock:
            return "".join(self._rng.choice(DIGITS) for _ in range(CARD_NUMBER_LENGTH))

    __call__ = generate


# Seeded once from OS entropy and shared by every request in the process.
default_generator = CardNumberGenerator()


def generate_card_number() -> str:
    return default_generator.generate()


def is_valid_card_number(value: str | None) -> bool:
    """Return True when value is exactly 16 ASCII digits."""
    if not value:
        return False
    return bool(CARD_NUMBER_PATTERN.fullmatch(value))
