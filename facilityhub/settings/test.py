"""
Test settings for FacilityHub project.

These settings override the base settings for test environments.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

# In-memory SQLite database for testing
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# The schedule lock needs a cache with an atomic add(), so no DummyCache here
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "facilityhub-test",
    }
}

# Password hashers are slow; use fast ones for tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Make tests faster by avoiding real translations
USE_I18N = False

# Fail fast on a held lock instead of waiting
SCHEDULING = {
    "LOCK_EXPIRES": 30,
    "LOCK_TIMEOUT": 0.2,
    "LOCK_POLL_INTERVAL": 0.05,
}

# Disable logging during tests to speed them up
LOGGING = {
    "version": 1,
    "disable_existing_loggers": True,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "loggers": {
        "": {
            "handlers": ["null"],
            "level": "CRITICAL",
        },
    },
}
