# otp/models.py
"""
PATH: otp/models.py

One-time verification codes sent over WhatsApp before registration.

Rules:
- phone is always stored normalized (+225...).
- At most one live code per phone: sending a new code deletes the old ones.
- A verified code stays until registration consumes it or it expires.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class OneTimePassword(models.Model):
    phone = models.CharField(max_length=32, db_index=True)
    code = models.CharField(max_length=6)

    expires_at = models.DateTimeField()
    verified = models.BooleanField(default=False)
    attempts = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        state = "verified" if self.verified else "pending"
        return f"OTP {self.phone} ({state})"

    @property
    def is_expired(self) -> bool:
        return self.expires_at < timezone.now()
