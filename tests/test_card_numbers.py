from __future__ import annotations

import random
import threading

from creditcard_api.domain.card_numbers import (
    CARD_NUMBER_LENGTH,
    CardNumberGenerator,
    generate_card_number,
    is_valid_card_number,
)


def test_generated_number_is_sixteen_digits():
    for _ in range(200):
        number = generate_card_number()
        assert len(number) == CARD_NUMBER_LENGTH == 16
        assert number.isdigit()
        assert is_valid_card_number(number)


def test_seeded_generators_repeat_the_same_sequence():
    first = CardNumberGenerator(seed=42)
    second = CardNumberGenerator(random.Random(42))
    assert [first.generate() for _ in range(5)] == [second() for _ in range(5)]


def test_successive_calls_are_not_correlated():
    gen = CardNumberGenerator()
    numbers = {gen.generate() for _ in range(100)}
    assert len(numbers) == 100


def test_every_digit_shows_up():
    gen = CardNumberGenerator(seed=7)
    seen = set("".join(gen.generate() for _ in range(50)))
    assert seen == set("0123456789")


def test_shared_generator_is_safe_across_threads():
    gen = CardNumberGenerator()
    results: list[str] = []
    lock = threading.Lock()

    def worker():
        local = [gen.generate() for _ in range(100)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 800
    assert all(is_valid_card_number(n) for n in results)


def test_is_valid_card_number_rejects_bad_values():
    assert not is_valid_card_number(None)
    assert not is_valid_card_number("")
    assert not is_valid_card_number("123456789012345")
    assert not is_valid_card_number("12345678901234567")
    assert not is_valid_card_number("1234 5678 9012 34")
    assert not is_valid_card_number("123456789012345a")
    assert is_valid_card_number("0000000000000000")
