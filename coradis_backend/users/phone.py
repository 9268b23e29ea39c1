# users/phone.py
"""
PHONE NUMBERS (Côte d'Ivoire)

Customers sign in with their phone number, so every phone that reaches the
database goes through normalize_phone() first:
- strip spaces, dashes and parentheses
- leading "0" is replaced by the +225 country code
- any other number without "+" gets +225 prepended
"""

from __future__ import annotations

import re

COUNTRY_CODE = "+225"

_SEPARATORS = re.compile(r"[\s\-()]")


def normalize_phone(phone: str | None) -> str:
    normalized = _SEPARATORS.sub("", phone or "")
    if not normalized:
        return ""

    if normalized.startswith("0"):
        normalized = COUNTRY_CODE + normalized[1:]

    if not normalized.startswith("+"):
        normalized = COUNTRY_CODE + normalized

    return normalized


def looks_like_phone(identifier: str) -> bool:
    """An identifier is treated as a phone when it has no letters and no '@'."""
    ident = _SEPARATORS.sub("", identifier or "")
    return bool(ident) and bool(re.fullmatch(r"\+?\d{6,15}", ident))


# E.164: "+" then at most 15 digits
_NORMALIZED_PHONE = re.compile(r"\+\d{8,15}")


def is_valid_phone(normalized: str) -> bool:
    return bool(_NORMALIZED_PHONE.fullmatch(normalized or ""))
