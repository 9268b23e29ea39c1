"""
PATH: users/models/user.py

CUSTOM USER MODEL

One table for both audiences of the storefront:
- admins   -> sign in with username (or email) on the dashboard
- customers -> sign in with their phone number (normalized to +225...)

Rules:
- username is always set: admins choose it, customers get one derived from
  their phone number.
- phone is unique when present (customers always have one).
- Loyalty data for customers lives in customers.Customer (one-to-one).
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from users.phone import normalize_phone


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def _unique_username(self, base: str) -> str:
        base = (base or "user").strip().lower()
        candidate = base
        i = 1
        while self.model.objects.filter(username__iexact=candidate).exists():
            i += 1
            candidate = f"{base}{i}"
        return candidate

    def create_user(self, username=None, password=None, **extra_fields):
        """
        Supports:
        - create_user(username="admin", email="a@b.ci", password="x")
        - create_user(phone="0707070707", password="x", role="customer")

        Rules:
        - Must provide at least one of: username or phone.
        - If username missing but phone present: username is derived from the phone digits.
        """
        username = (username or "").strip()
        phone = normalize_phone(extra_fields.pop("phone", None)) or None
        email = self.normalize_email((extra_fields.pop("email", "") or "").strip())

        if not username and not phone:
            raise ValueError("Provide at least username or phone")

        if not username:
            username = self._unique_username(f"client{phone.lstrip('+')}")

        extra_fields.setdefault("is_active", True)

        user = self.model(username=username, phone=phone, email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_customer(self, *, phone, password, name="", email=""):
        return self.create_user(
            phone=phone,
            password=password,
            name=name,
            email=email,
            role=self.model.ROLE_CUSTOMER,
        )

    def create_admin(self, *, username, email, password, name=""):
        return self.create_user(
            username=username,
            email=email,
            password=password,
            name=name,
            role=self.model.ROLE_ADMIN,
            is_staff=True,
        )

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", self.model.ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(username=username, email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    ROLE_ADMIN = "admin"
    ROLE_CUSTOMER = "customer"

    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_CUSTOMER, "Customer"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=32, unique=True, null=True, blank=True)

    name = models.CharField(max_length=120, blank=True, default="")

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    class Meta:
        ordering = ["-created_at"]

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    @property
    def is_customer(self) -> bool:
        return self.role == self.ROLE_CUSTOMER

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()
        if self.phone:
            self.phone = normalize_phone(self.phone)
        else:
            self.phone = None

        if self.role == self.ROLE_CUSTOMER and not self.phone:
            raise ValidationError({"phone": "Customers must have a phone number"})

    def __str__(self):
        ident = self.phone if self.is_customer else self.username
        return f"{ident} ({self.role})"
