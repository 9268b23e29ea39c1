"""
PATH: users/auth_backends.py

AUTH BACKEND: username, email OR phone login

Rules:
- Login accepts ONE identifier:
  - email (identifier contains "@"), OR
  - phone (digits only, optional leading "+"; normalized to +225...),
    falling back to the username when no phone matches, OR
  - username (anything else)
- Inactive accounts never authenticate.
- An optional `role` kwarg restricts the lookup (admin dashboard vs customer app),
  so a customer password can never open the admin dashboard.

This is used by Django authenticate() (admin site + API login views).
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

from users.phone import looks_like_phone, normalize_phone

User = get_user_model()


class IdentifierBackend(BaseBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        identifier = (
            username or kwargs.get("identifier") or kwargs.get("phone") or kwargs.get("email") or ""
        ).strip()
        if not identifier or password is None:
            return None

        qs = User.objects.all()
        role = kwargs.get("role")
        if role:
            qs = qs.filter(role=role)

        if "@" in identifier:
            user = qs.filter(email__iexact=identifier).first()
        elif looks_like_phone(identifier):
            user = qs.filter(phone=normalize_phone(identifier)).first()
            if user is None:
                # all-digit usernames
                user = qs.filter(username__iexact=identifier).first()
        else:
            user = qs.filter(username__iexact=identifier).first()

        if user is None or not user.is_active:
            return None

        if user.check_password(password):
            return user

        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None

    def has_perm(self, user_obj, perm, obj=None):
        # Django admin site: admins see everything, customers nothing.
        return bool(user_obj.is_active and getattr(user_obj, "is_admin", False))

    def has_module_perms(self, user_obj, app_label):
        return bool(user_obj.is_active and getattr(user_obj, "is_admin", False))
