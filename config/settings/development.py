"""
Development settings – extends base settings with debug-friendly overrides.
"""
from decouple import config

from .base import *  # noqa: F401, F403

DEBUG = config("DEBUG", default=True, cast=bool)

# In development only: allow all hosts if DEBUG is True
if DEBUG:
    ALLOWED_HOSTS = ["*"]

# Disable HTTPS requirements in development
SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# Serve the bundled sample appliance configuration unless told otherwise
APPLIANCE_CONFIG_PATH = config(
    "APPLIANCE_CONFIG_PATH",
    default=str(BASE_DIR / "config" / "sample_config.json"),  # noqa: F405
)

# Show detailed errors
LOGGING["root"]["level"] = "DEBUG"  # noqa: F405
