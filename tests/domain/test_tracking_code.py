"""Unit tests for tracking code generation."""

import pytest

from laundry.domain.service.tracking_code import (
    COUNTER_LENGTH,
    MAX_ATTEMPTS,
    PUBLIC_ALPHABET,
    PUBLIC_LENGTH,
    generate_public_code,
    generate_tracking_code,
    normalize,
)


def test_public_code_avoids_ambiguous_glyphs():
    for _ in range(200):
        code = generate_public_code(lambda c: False)
        assert len(code) == PUBLIC_LENGTH
        assert not set(code) & set("0OIL1")
        assert set(code) <= set(PUBLIC_ALPHABET)


def test_counter_code_length():
    code = generate_tracking_code(lambda c: False)
    assert len(code) == COUNTER_LENGTH
    assert code.isalnum() and code.upper() == code


def test_collision_is_retried():
    taken: list[str] = []

    def exists(code: str) -> bool:
        taken.append(code)
        return len(taken) < 3

    code = generate_public_code(exists)
    assert code == taken[-1]
    assert len(taken) == 3


def test_gives_up_after_max_attempts():
    with pytest.raises(RuntimeError, match=str(MAX_ATTEMPTS)):
        generate_public_code(lambda c: True)


def test_normalize():
    assert normalize("  ab2cd3 ") == "AB2CD3"
