"""
Accounts models - the users collection.
"""

from django.db import models


class User(models.Model):
    """
    A registered user, identified by phone number.

    phone_number is the lookup key for login and OTP verification. It is
    indexed but not unique: registration checks for an existing record
    before creating one, and that check is not atomic.

    otp_attempts is set to 0 on creation and is never accepted from or
    returned to API clients.
    """

    name = models.CharField(max_length=255)
    email = models.CharField(max_length=255)
    phone_number = models.CharField(
        max_length=32,
        db_index=True,
        help_text="Country code followed by the national number, e.g. +14155551234",
    )
    otp_attempts = models.PositiveIntegerField(
        default=0,
        editable=False,
        help_text="Server-managed OTP attempt counter",
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} (***{self.phone_number[-4:]})"
