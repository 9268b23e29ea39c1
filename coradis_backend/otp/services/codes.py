# otp/services/codes.py
"""
PATH: otp/services/codes.py

PHONE VERIFICATION SERVICE

send_code(phone):
- refuses phones that already belong to an account
- generates a random numeric code (OTP.CODE_LENGTH digits, OTP.TTL_MINUTES)
- replaces any previous code for the phone
- sends it over WhatsApp

verify_code(phone, code):
- wrong code -> attempts += 1 on the live code; once OTP.MAX_ATTEMPTS is
  reached the code is deleted (TooManyOtpAttempts)
- expired code -> deleted (OtpExpired)
- success -> marked verified (registration consumes it later); wrong
  guesses against a verified code are refused without counting
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from notifications.services.whatsapp import WhatsAppDeliveryError, send_otp_whatsapp
from otp.models import OneTimePassword
from otp.services.exceptions import (
    InvalidOtpCode,
    OtpDeliveryFailed,
    OtpExpired,
    PhoneAlreadyRegistered,
    TooManyOtpAttempts,
)
from users.phone import normalize_phone

logger = logging.getLogger(__name__)


def _cfg() -> dict:
    return getattr(settings, "OTP", {}) or {}


def generate_code(length: int | None = None) -> str:
    length = int(length or _cfg().get("CODE_LENGTH", 6))
    # First digit is never 0 so the code keeps its length when treated as a number
    first = str(secrets.randbelow(9) + 1)
    rest = "".join(str(secrets.randbelow(10)) for _ in range(length - 1))
    return first + rest


@dataclass(frozen=True)
class SentCode:
    phone: str
    code: str
    delivered: bool


def send_code(phone: str) -> SentCode:
    normalized = normalize_phone(phone)

    User = get_user_model()
    if User.objects.filter(phone=normalized).exists():
        raise PhoneAlreadyRegistered("Ce numéro de téléphone est déjà enregistré")

    code = generate_code()
    ttl = int(_cfg().get("TTL_MINUTES", 10))

    with transaction.atomic():
        OneTimePassword.objects.filter(phone=normalized).delete()
        otp = OneTimePassword.objects.create(
            phone=normalized,
            code=code,
            expires_at=timezone.now() + timedelta(minutes=ttl),
        )

    try:
        delivered = send_otp_whatsapp(normalized, code)
    except WhatsAppDeliveryError as exc:
        otp.delete()
        raise OtpDeliveryFailed("Impossible d'envoyer le code par WhatsApp. Réessayez plus tard.") from exc

    logger.info("OTP sent", extra={"phone": normalized, "delivered": delivered})
    return SentCode(phone=normalized, code=code, delivered=delivered)


def verify_code(phone: str, code: str) -> str:
    """
    Outcome is decided inside the transaction and raised after it commits,
    so attempt counters and deletions are kept.
    """
    normalized = normalize_phone(phone)
    code = (code or "").strip()
    max_attempts = int(_cfg().get("MAX_ATTEMPTS", 5))

    outcome = "verified"

    with transaction.atomic():
        live = (
            OneTimePassword.objects.select_for_update()
            .filter(phone=normalized)
            .order_by("-created_at")
            .first()
        )

        if live is None:
            outcome = "invalid"
        elif live.code != code and live.verified:
            outcome = "invalid"
        elif live.code != code:
            live.attempts += 1
            if live.attempts >= max_attempts:
                live.delete()
                outcome = "burned"
            else:
                live.save(update_fields=["attempts"])
                outcome = "invalid"
        elif live.is_expired:
            live.delete()
            outcome = "expired"
        elif not live.verified:
            live.verified = True
            live.save(update_fields=["verified"])

    if outcome == "burned":
        logger.warning("OTP burned after too many attempts", extra={"phone": normalized})
        raise TooManyOtpAttempts("Trop de tentatives. Demandez un nouveau code.")

    if outcome == "invalid":
        logger.info("OTP invalid", extra={"phone": normalized})
        raise InvalidOtpCode("Code de vérification invalide")

    if outcome == "expired":
        logger.info("OTP expired", extra={"phone": normalized})
        raise OtpExpired("Code de vérification expiré. Demandez un nouveau code.")

    logger.info("OTP verified", extra={"phone": normalized})
    return normalized


def has_verified_code(phone: str) -> bool:
    return OneTimePassword.objects.filter(
        phone=normalize_phone(phone),
        verified=True,
        expires_at__gte=timezone.now(),
    ).exists()


def delete_codes(phone: str) -> int:
    normalized = normalize_phone(phone)
    deleted, _ = OneTimePassword.objects.filter(phone=normalized).delete()
    logger.info("OTP codes deleted", extra={"phone": normalized, "count": deleted})
    return deleted
