"""
Test settings.

In-memory SQLite and fixed dummy credentials so the suite runs without
external services.
"""

from .base import *  # noqa: F403

DEBUG = False
ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

TWILIO_ACCOUNT_SID = "ACtest00000000000000000000000000"
TWILIO_AUTH_TOKEN = "test-auth-token"
TWILIO_SERVICE_SID = "VAtest00000000000000000000000000"

SESSION_TOKEN_SECRET = "test-session-secret-0123456789abcdef0123456789"

LOG_JSON = False
LOG_LEVEL = "WARNING"
