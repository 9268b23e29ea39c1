# users/tokens.py
"""
JWT helpers shared by the admin and customer auth views.
"""

from __future__ import annotations

import logging

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

logger = logging.getLogger(__name__)


def issue_tokens(user) -> dict:
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


def revoke_refresh_token(raw_token: str | None) -> bool:
    """
    Blacklist a refresh token. Logout always succeeds for the caller,
    so an invalid or already-revoked token only returns False.
    """
    if not raw_token:
        return False

    try:
        RefreshToken(raw_token).blacklist()
    except TokenError as exc:
        logger.info("Refresh token not revoked", extra={"reason": str(exc)})
        return False

    return True
