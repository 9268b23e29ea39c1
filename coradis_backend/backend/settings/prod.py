# backend/settings/prod.py
"""
PATH: backend/settings/prod.py

PRODUCTION SETTINGS

Fail closed on anything a public storefront cannot run without:
- SECRET_KEY, ALLOWED_HOSTS, Postgres DATABASE_URL
- https-only CORS / CSRF origins for the shop front
- Twilio credentials whenever registration requires a WhatsApp OTP
- a non-default admin URL

Everything else is hardened by default (TLS redirect, HSTS, secure cookies)
and static files are served by WhiteNoise.
"""

from __future__ import annotations

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403
from .base import ADMIN_PATH, BASE_DIR, MIDDLEWARE, OTP, WHATSAPP, env  # explicit for Ruff (F405)

DEBUG = False


def _required(name: str, value):
    if not value:
        raise ImproperlyConfigured(f"{name} must be set in production.")
    return value


def _public_origins(name: str) -> list[str]:
    origins = _required(name, env.list(name, default=[]))
    for origin in origins:
        if not origin.startswith("https://"):
            raise ImproperlyConfigured(f"{name}: {origin} must use https:// in production.")
        if "localhost" in origin or "127.0.0.1" in origin:
            raise ImproperlyConfigured(f"{name}: remove {origin} in production.")
    return origins


# ----------------------------
# Secrets / hosts
# ----------------------------
SECRET_KEY = _required("SECRET_KEY", (env("SECRET_KEY", default="") or "").strip())
if SECRET_KEY == "dev-insecure-change-me":
    raise ImproperlyConfigured("SECRET_KEY is still the development placeholder.")

ALLOWED_HOSTS = _required("ALLOWED_HOSTS", env.list("ALLOWED_HOSTS", default=[]))

if ADMIN_PATH.strip("/") == "admin":
    raise ImproperlyConfigured("ADMIN_PATH must not be the default 'admin/' in production.")

# ----------------------------
# Database (Postgres only)
# ----------------------------
_database_url = _required("DATABASE_URL", (env("DATABASE_URL", default="") or "").strip())
if _database_url.startswith("sqlite"):
    raise ImproperlyConfigured("Refusing to take orders on SQLite in production.")

DATABASES = {"default": env.db("DATABASE_URL")}
DATABASES["default"]["CONN_MAX_AGE"] = env.int("DB_CONN_MAX_AGE", default=60)

# ----------------------------
# Static files (WhiteNoise)
# ----------------------------
STATIC_ROOT = env("STATIC_ROOT", default=str(BASE_DIR / "staticfiles"))

MIDDLEWARE.insert(1, "whitenoise.middleware.WhiteNoiseMiddleware")
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# ----------------------------
# TLS / headers / cookies
# ----------------------------
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
SECURE_HSTS_SECONDS = env.int("SECURE_HSTS_SECONDS", default=3600)
SECURE_HSTS_INCLUDE_SUBDOMAINS = env.bool("SECURE_HSTS_INCLUDE_SUBDOMAINS", default=True)
SECURE_HSTS_PRELOAD = env.bool("SECURE_HSTS_PRELOAD", default=False)

SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "same-origin"
SECURE_CROSS_ORIGIN_OPENER_POLICY = "same-origin"
X_FRAME_OPTIONS = "DENY"

SESSION_COOKIE_SECURE = True
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SAMESITE = "Lax"
CSRF_COOKIE_SECURE = True
CSRF_COOKIE_HTTPONLY = True
CSRF_COOKIE_SAMESITE = "Lax"

# ----------------------------
# Shop front origins (JWT in headers, no cookies cross-site)
# ----------------------------
CORS_ALLOWED_ORIGINS = _public_origins("CORS_ALLOWED_ORIGINS")
CSRF_TRUSTED_ORIGINS = _public_origins("CSRF_TRUSTED_ORIGINS")
CORS_ALLOW_CREDENTIALS = False

# ----------------------------
# OTP over WhatsApp
# ----------------------------
OTP["EXPOSE_CODE"] = False
OTP["REQUIRED_FOR_REGISTRATION"] = env.bool("OTP_REQUIRED_FOR_REGISTRATION", default=True)

if OTP["REQUIRED_FOR_REGISTRATION"]:
    _required("TWILIO_ACCOUNT_SID", WHATSAPP["ACCOUNT_SID"])
    _required("TWILIO_AUTH_TOKEN", WHATSAPP["AUTH_TOKEN"])
    _required("TWILIO_WHATSAPP_FROM", WHATSAPP["FROM"])
