"""
Tests for accounts models.
"""

import pytest
from django.forms import modelform_factory

from apps.accounts.models import User
from tests.accounts.factories import UserFactory


@pytest.mark.django_db
class TestUserModel:
    """Tests for User model."""

    def test_attempt_counter_defaults_to_zero(self) -> None:
        user = User.objects.create(name="Ada", email="ada@example.com", phone_number="+14155551234")

        assert user.otp_attempts == 0

    def test_phone_number_is_not_unique(self) -> None:
        """Uniqueness is checked at registration, not enforced by the table."""
        UserFactory.create(phone_number="+14155551234")
        UserFactory.create(phone_number="+14155551234")

        assert User.objects.filter(phone_number="+14155551234").count() == 2

    def test_str_masks_phone(self) -> None:
        user = UserFactory.build(name="Ada", phone_number="+14155551234")

        assert str(user) == "Ada (***1234)"

    def test_attempt_counter_not_editable_through_forms(self) -> None:
        form_class = modelform_factory(User, fields="__all__")

        assert "otp_attempts" not in form_class.base_fields
        assert {"name", "email", "phone_number"} <= set(form_class.base_fields)
