# users/management/commands/create_admin.py

"""
PATH: users/management/commands/create_admin.py

Admin account bootstrap.

- Reads --username/--email/--password, falling back to the
  AUTO_ADMIN_USERNAME / AUTO_ADMIN_EMAIL / AUTO_ADMIN_PASSWORD env vars.
- Idempotent: creates the admin if missing; resets the password if it exists.
- Does NOT print the password.
"""

from __future__ import annotations

import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction


class Command(BaseCommand):
    help = "Create/update a dashboard admin account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--username", default=os.environ.get("AUTO_ADMIN_USERNAME", "admin"))
        parser.add_argument("--email", default=os.environ.get("AUTO_ADMIN_EMAIL", ""))
        parser.add_argument("--password", default=os.environ.get("AUTO_ADMIN_PASSWORD", ""))

    def handle(self, *args, **options):
        username = (options["username"] or "").strip()
        email = (options["email"] or "").strip()
        password = (options["password"] or "").strip()

        if not username or not email or not password:
            raise CommandError("username, email and password are required (options or AUTO_ADMIN_* env vars).")

        if len(password) < 6:
            raise CommandError("password must be at least 6 characters.")

        User = get_user_model()

        with transaction.atomic():
            user = User.objects.filter(username__iexact=username).first()

            if user:
                user.role = User.ROLE_ADMIN
                user.email = email
                user.is_active = True
                user.is_staff = True
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Admin ensured: {username} (updated)"))
                return

            User.objects.create_admin(username=username, email=email, password=password)
            self.stdout.write(self.style.SUCCESS(f"Admin ensured: {username} (created)"))
