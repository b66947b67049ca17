# teams/sanitizers.py
"""
Input normalisation for registration payloads.

Runs before field validation so the stored values are the same ones
the uniqueness checks compare against.
"""
import re
from typing import Optional


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip: bool = True) -> str:
    """
    Sanitize plain text input.

    - Strips leading/trailing whitespace
    - Removes control characters
    - Enforces maximum length
    - Returns empty string for None input
    """
    if text is None:
        return ""

    if strip:
        text = text.strip()

    # Remove control characters except newlines and tabs
    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_name(name: Optional[str]) -> str:
    """Single line, collapsed whitespace."""
    text = sanitize_text(name)
    return re.sub(r'\s+', ' ', text)


def normalize_email(email: Optional[str]) -> str:
    """Emails are compared and stored lower-cased."""
    return sanitize_text(email).lower()
