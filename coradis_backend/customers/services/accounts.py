# customers/services/accounts.py
"""
PATH: customers/services/accounts.py

CUSTOMER ACCOUNTS

register_customer():
- phone is normalized and must not belong to any account
- when OTP["REQUIRED_FOR_REGISTRATION"] is on, a verified code for the phone
  must exist; it is consumed on success
- the optional referral code is checked BEFORE anything is created so a bad
  code never leaves a half-registered account behind

authenticate_customer():
- phone + password, customers only
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.db import transaction

from customers.models import Customer
from customers.services.exceptions import (
    InvalidCustomerCredentials,
    InvalidPhoneNumber,
    PhoneAlreadyUsed,
    PhoneNotVerified,
)
from customers.services.loyalty import apply_referral, find_sponsor, generate_referral_code
from otp.services.codes import delete_codes, has_verified_code
from users.phone import is_valid_phone, normalize_phone

logger = logging.getLogger(__name__)

User = get_user_model()


def _otp_required() -> bool:
    return bool((getattr(settings, "OTP", {}) or {}).get("REQUIRED_FOR_REGISTRATION", False))


def register_customer(
    *,
    name: str,
    phone: str,
    password: str,
    email: str = "",
    address: str = "",
    referral_code: str = "",
) -> Customer:
    normalized = normalize_phone(phone)

    if not is_valid_phone(normalized):
        raise InvalidPhoneNumber("Numéro de téléphone invalide")

    if User.objects.filter(phone=normalized).exists():
        raise PhoneAlreadyUsed("Ce numéro de téléphone est déjà utilisé")

    if _otp_required() and not has_verified_code(normalized):
        raise PhoneNotVerified("Veuillez d'abord vérifier votre numéro de téléphone")

    if referral_code:
        find_sponsor(referral_code)

    with transaction.atomic():
        user = User.objects.create_customer(
            phone=normalized,
            password=password,
            name=name.strip(),
            email=email or "",
        )
        customer = Customer.objects.create(
            user=user,
            address=(address or "").strip(),
            referral_code=generate_referral_code(),
        )

        if referral_code:
            apply_referral(customer, referral_code)

        delete_codes(normalized)

    logger.info(
        "Customer registered",
        extra={"customer_id": customer.pk, "referred": bool(referral_code)},
    )
    return customer


def authenticate_customer(*, phone: str, password: str, request=None) -> Customer:
    user = authenticate(
        request=request,
        username=normalize_phone(phone),
        password=password,
        role=User.ROLE_CUSTOMER,
    )

    customer = getattr(user, "customer", None) if user else None
    if customer is None:
        logger.warning("Customer login failed", extra={"phone": normalize_phone(phone)})
        raise InvalidCustomerCredentials("Numéro de téléphone ou mot de passe incorrect")

    return customer


def customer_for(user) -> Customer | None:
    """Loyalty profile of an authenticated customer user, else None."""
    if not user or not getattr(user, "is_authenticated", False):
        return None
    if getattr(user, "role", None) != User.ROLE_CUSTOMER:
        return None
    return Customer.objects.filter(user=user).first()
