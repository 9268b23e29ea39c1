# users/authentication.py
"""
OPTIONAL JWT AUTHENTICATION

For public endpoints that behave differently for signed-in users
(check-auth, guest checkout, discount lookup): an expired or malformed
token is treated as anonymous instead of failing the request with 401.
"""

from __future__ import annotations

import logging

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

logger = logging.getLogger(__name__)


class OptionalJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed) as exc:
            logger.debug("Ignoring invalid token on public endpoint", extra={"reason": str(exc)})
            return None
