"""
Admin configuration for accounts app.
"""

from django.contrib import admin

from apps.accounts.models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin for registered users."""

    list_display = [
        "id",
        "name",
        "email",
        "phone_number_masked",
        "otp_attempts",
        "created_at",
    ]
    list_filter = ["created_at"]
    search_fields = ["name", "email", "phone_number"]
    readonly_fields = [
        "otp_attempts",
        "created_at",
        "updated_at",
    ]

    def phone_number_masked(self, obj: User) -> str:
        """Show only last 4 digits of phone for privacy."""
        return f"***{obj.phone_number[-4:]}"

    phone_number_masked.short_description = "Phone"  # type: ignore[attr-defined]
