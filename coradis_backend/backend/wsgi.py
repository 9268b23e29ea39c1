"""
PATH: backend/wsgi.py

WSGI entrypoint for the Coradis storefront API (gunicorn backend.wsgi).
Production deploys must export DJANGO_SETTINGS_MODULE=backend.settings.prod;
without it the dev settings are used.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_wsgi_application()
