# teams/identifiers.py
"""
Registration IDs: <PREFIX>-<base36 ms timestamp>-<base36 random>.

Collision resistance comes from the millisecond timestamp plus random
suffix; the unique index on Team.registration_id is the backstop.
"""
import re
import secrets
import time
from typing import Optional

from django.conf import settings

BASE36_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
RANDOM_SUFFIX_LENGTH = 4


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def _prefix(prefix: Optional[str]) -> str:
    return (prefix or getattr(settings, "REGISTRATION_ID_PREFIX", "MFA")).upper()


def generate_registration_id(prefix: Optional[str] = None, now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    timestamp = to_base36(now_ms)
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(RANDOM_SUFFIX_LENGTH))
    return f"{_prefix(prefix)}-{timestamp}-{suffix}"


def is_registration_id(value: Optional[str], prefix: Optional[str] = None) -> bool:
    """Cheap format check to avoid DB hits for garbage ids."""
    if not value:
        return False
    pattern = rf"^{re.escape(_prefix(prefix))}-[A-Z0-9]+-[A-Z0-9]+$"
    return re.match(pattern, value, flags=re.IGNORECASE) is not None
