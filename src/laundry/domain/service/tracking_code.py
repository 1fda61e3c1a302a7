"""Tracking code generation.

Public booking codes are short and avoid glyphs that are easy to misread
(0/O, 1/I/L).  Counter orders get a longer code.
"""

from __future__ import annotations

import secrets
import string
from collections.abc import Callable

PUBLIC_ALPHABET = "".join(
    c for c in string.ascii_uppercase + string.digits if c not in "0OIL1"
)
COUNTER_ALPHABET = string.ascii_uppercase + string.digits

PUBLIC_LENGTH = 6
COUNTER_LENGTH = 10
MAX_ATTEMPTS = 100


def generate_tracking_code(
    exists: Callable[[str], bool],
    length: int = COUNTER_LENGTH,
    alphabet: str = COUNTER_ALPHABET,
) -> str:
    """Draw random codes until one is not taken."""
    for _ in range(MAX_ATTEMPTS):
        code = "".join(secrets.choice(alphabet) for _ in range(length))
        if not exists(code):
            return code
    raise RuntimeError(f"Could not find a free tracking code in {MAX_ATTEMPTS} attempts")


def generate_public_code(exists: Callable[[str], bool]) -> str:
    return generate_tracking_code(exists, PUBLIC_LENGTH, PUBLIC_ALPHABET)


def normalize(code: str) -> str:
    return code.strip().upper()
