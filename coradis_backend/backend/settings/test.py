# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- In-memory SQLite
- Fast password hashing
- Throttles opened up (locmem cache survives across test cases)
- WhatsApp never configured unless a test patches it in
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import OTP, REST_FRAMEWORK, WHATSAPP

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    scope: "10000/min" for scope in REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"]
}

OTP["REQUIRED_FOR_REGISTRATION"] = False
OTP["EXPOSE_CODE"] = False

WHATSAPP["ACCOUNT_SID"] = ""
WHATSAPP["AUTH_TOKEN"] = ""
WHATSAPP["SHOP_NUMBER"] = ""
