"""
PATH: backend/settings/base.py

BASE SETTINGS (shared by dev + prod + test)

Storefront backend for OK Glaçons / Lanaïa (Abidjan):
- Public catalog + checkout (guest or customer)
- Customer accounts, loyalty points, referral scratch cards
- WhatsApp OTP phone verification
- Admin order dashboard

Operational maturity:
- Throttling per public scope
- Sentry (optional): error visibility in production
- Business constants (fees, loyalty cycle, OTP TTL) overridable from env
"""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

import environ
from corsheaders.defaults import default_headers, default_methods

# -----------------------------------------
# BASE DIRECTORY
# -----------------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# -----------------------------------------
# TEST MODE DETECTION
# -----------------------------------------
TESTING = "test" in sys.argv or "pytest" in (sys.argv[0] if sys.argv else "")

# -----------------------------------------
# ENV (django-environ)
# -----------------------------------------
env = environ.Env(
    DEBUG=(bool, True),
    SECRET_KEY=(str, ""),
    TIME_ZONE=(str, "Africa/Abidjan"),
    ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1"]),
    CORS_ALLOWED_ORIGINS=(list, ["http://localhost:5173"]),
    CSRF_TRUSTED_ORIGINS=(list, ["http://localhost:5173"]),
    DATABASE_URL=(str, f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
    LOG_LEVEL=(str, "INFO"),
    ADMIN_PATH=(str, "admin/"),
    # Throttling
    THROTTLE_ANON_RATE=(str, "60/min"),
    THROTTLE_USER_RATE=(str, "600/min"),
    THROTTLE_PUBLIC_WRITE_RATE=(str, "10/min"),
    THROTTLE_PUBLIC_CATALOG_RATE=(str, "120/min"),
    THROTTLE_OTP_RATE=(str, "5/min"),
    # Store pricing (FCFA)
    DELIVERY_FEE_ZONE_1=(int, 1000),
    DELIVERY_FEE_ZONE_2=(int, 1500),
    DELIVERY_FEE_ZONE_3=(int, 2000),
    FREE_DELIVERY_THRESHOLD=(int, 15000),
    EXPRESS_DELIVERY_FEE=(int, 500),
    # Loyalty
    LOYALTY_CYCLE_ORDERS=(int, 10),
    LOYALTY_CYCLE_DISCOUNT_PERCENT=(int, 10),
    LOYALTY_FCFA_PER_POINT_EARNED=(int, 1000),
    LOYALTY_POINT_VALUE_FCFA=(int, 100),
    # OTP
    OTP_TTL_MINUTES=(int, 10),
    OTP_MAX_ATTEMPTS=(int, 5),
    OTP_REQUIRED_FOR_REGISTRATION=(bool, False),
    OTP_EXPOSE_CODE=(bool, False),
    # WhatsApp (Twilio)
    TWILIO_ACCOUNT_SID=(str, ""),
    TWILIO_AUTH_TOKEN=(str, ""),
    TWILIO_WHATSAPP_FROM=(str, "whatsapp:+14155238886"),
    WHATSAPP_SHOP_NUMBER=(str, ""),
    # Sentry (optional; enable by setting SENTRY_DSN)
    SENTRY_DSN=(str, ""),
    SENTRY_ENVIRONMENT=(str, "development"),
    SENTRY_TRACES_SAMPLE_RATE=(float, 0.0),
    SENTRY_SEND_PII=(bool, False),
)

# -----------------------------------------
# LOAD .env
# -----------------------------------------
env_file_1 = BASE_DIR / ".env"
env_file_2 = BASE_DIR.parent / ".env"

if env_file_1.exists():
    env.read_env(str(env_file_1))
elif env_file_2.exists():
    env.read_env(str(env_file_2))

# -----------------------------------------
# CORE SECURITY
# -----------------------------------------
SECRET_KEY = (env("SECRET_KEY") or "dev-insecure-change-me").strip()
DEBUG = env.bool("DEBUG")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS")

# -----------------------------------------
# I18N / TZ
# -----------------------------------------
LANGUAGE_CODE = "fr"
LANGUAGES = [
    ("fr", "Français"),
    ("en", "English"),
]
TIME_ZONE = (env("TIME_ZONE") or "Africa/Abidjan").strip()
USE_I18N = True
USE_TZ = True

# -----------------------------------------
# AUTH USER MODEL (custom)
# -----------------------------------------
AUTH_USER_MODEL = "users.User"

AUTHENTICATION_BACKENDS = [
    "users.auth_backends.IdentifierBackend",
]

# -----------------------------------------
# INSTALLED APPS
# -----------------------------------------
INSTALLED_APPS = [
    "corsheaders",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "rest_framework_simplejwt",
    "rest_framework_simplejwt.token_blacklist",
    "drf_spectacular",
    "django_filters",
    "users",
    "products",
    "customers",
    "orders",
    "otp",
    "contact",
]

# -----------------------------------------
# MIDDLEWARE
# -----------------------------------------
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "backend.urls"
ADMIN_PATH = env("ADMIN_PATH")
WSGI_APPLICATION = "backend.wsgi.application"
APPEND_SLASH = True

# -----------------------------------------
# TEMPLATES (required for Django admin)
# -----------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [str(BASE_DIR / "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

# -----------------------------------------
# REST FRAMEWORK
# -----------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticated",),
    "DEFAULT_FILTER_BACKENDS": ("django_filters.rest_framework.DjangoFilterBackend",),
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 20,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_THROTTLE_CLASSES": (
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
    ),
    "DEFAULT_THROTTLE_RATES": {
        "anon": env("THROTTLE_ANON_RATE"),
        "user": env("THROTTLE_USER_RATE"),
        "public_write": env("THROTTLE_PUBLIC_WRITE_RATE"),
        "public_catalog": env("THROTTLE_PUBLIC_CATALOG_RATE"),
        "otp": env("THROTTLE_OTP_RATE"),
    },
}

# -----------------------------------------
# SIMPLE JWT
# -----------------------------------------
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=30),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=30),
    "ROTATE_REFRESH_TOKENS": True,
    "BLACKLIST_AFTER_ROTATION": True,
}

# -----------------------------------------
# DATABASE
# -----------------------------------------
DATABASES = {
    "default": env.db("DATABASE_URL"),
}

# -----------------------------------------
# STORE PRICING + LOYALTY (all amounts in FCFA)
# -----------------------------------------
STORE = {
    "NAME": "Coradis",
    "CURRENCY": "XOF",
    "DELIVERY_FEES": {
        "zone_1": env.int("DELIVERY_FEE_ZONE_1"),
        "zone_2": env.int("DELIVERY_FEE_ZONE_2"),
        "zone_3": env.int("DELIVERY_FEE_ZONE_3"),
    },
    "FREE_DELIVERY_THRESHOLD": env.int("FREE_DELIVERY_THRESHOLD"),
    "EXPRESS_DELIVERY_FEE": env.int("EXPRESS_DELIVERY_FEE"),
    "LOYALTY_CYCLE_ORDERS": env.int("LOYALTY_CYCLE_ORDERS"),
    "LOYALTY_CYCLE_DISCOUNT_PERCENT": env.int("LOYALTY_CYCLE_DISCOUNT_PERCENT"),
    "LOYALTY_FCFA_PER_POINT_EARNED": env.int("LOYALTY_FCFA_PER_POINT_EARNED"),
    "LOYALTY_POINT_VALUE_FCFA": env.int("LOYALTY_POINT_VALUE_FCFA"),
}

# -----------------------------------------
# OTP (WhatsApp phone verification)
# -----------------------------------------
OTP = {
    "CODE_LENGTH": 6,
    "TTL_MINUTES": env.int("OTP_TTL_MINUTES"),
    "MAX_ATTEMPTS": env.int("OTP_MAX_ATTEMPTS"),
    "REQUIRED_FOR_REGISTRATION": env.bool("OTP_REQUIRED_FOR_REGISTRATION"),
    # Development only: echo the code back in the API response
    "EXPOSE_CODE": env.bool("OTP_EXPOSE_CODE"),
}

# -----------------------------------------
# WHATSAPP (Twilio)
# -----------------------------------------
WHATSAPP = {
    "ACCOUNT_SID": (env("TWILIO_ACCOUNT_SID") or "").strip(),
    "AUTH_TOKEN": (env("TWILIO_AUTH_TOKEN") or "").strip(),
    "FROM": (env("TWILIO_WHATSAPP_FROM") or "").strip(),
    "SHOP_NUMBER": (env("WHATSAPP_SHOP_NUMBER") or "").strip(),
}

# -----------------------------------------
# LOGGING
# -----------------------------------------
LOG_LEVEL = (env("LOG_LEVEL") or "INFO").strip().upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        app: {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False}
        for app in (
            "users",
            "products",
            "customers",
            "orders",
            "otp",
            "contact",
            "notifications",
        )
    },
}

# -----------------------------------------
# SENTRY (optional)
# -----------------------------------------
SENTRY_DSN = (env("SENTRY_DSN") or "").strip()
SENTRY_ENVIRONMENT = (env("SENTRY_ENVIRONMENT") or "development").strip()
SENTRY_TRACES_SAMPLE_RATE = float(env("SENTRY_TRACES_SAMPLE_RATE"))
SENTRY_SEND_PII = env.bool("SENTRY_SEND_PII")

if SENTRY_DSN:
    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=SENTRY_ENVIRONMENT,
        integrations=[DjangoIntegration()],
        traces_sample_rate=SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=SENTRY_SEND_PII,
    )

# -----------------------------------------
# CORS / CSRF
# -----------------------------------------
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS")
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = list(default_methods)
CORS_ALLOW_HEADERS = list(default_headers)

CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS")

# -----------------------------------------
# STATIC FILES
# -----------------------------------------
STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -----------------------------------------
# SWAGGER
# -----------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "Coradis Storefront API",
    "DESCRIPTION": "Catalog, checkout, loyalty/referral and admin order management API",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}
