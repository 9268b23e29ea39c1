# contact/models.py

from django.db import models


class ContactMessage(models.Model):
    """
    Message left through the storefront contact form.

    Inbox workflow: new -> read -> replied (any order is accepted;
    the dashboard just tags where the conversation is).
    """

    STATUS_NEW = "new"
    STATUS_READ = "read"
    STATUS_REPLIED = "replied"

    STATUS_CHOICES = [
        (STATUS_NEW, "Nouveau"),
        (STATUS_READ, "Lu"),
        (STATUS_REPLIED, "Répondu"),
    ]

    name = models.CharField(max_length=120)
    email = models.EmailField()
    phone = models.CharField(max_length=40, blank=True, default="")
    subject = models.CharField(max_length=200)
    message = models.TextField()

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_NEW, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.subject} ({self.name})"
