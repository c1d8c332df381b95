"""
Test settings – in-memory SQLite and a placeholder secret.
"""
import os

os.environ.setdefault("SECRET_KEY", "insecure-test-secret-key")

from .base import *  # noqa: E402, F401, F403

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

APPLIANCE_CONFIG_PATH = str(BASE_DIR / "config" / "sample_config.json")  # noqa: F405
API_ENABLED = True
API_READ_ONLY = False
API_ALLOWED_NETWORKS = []
