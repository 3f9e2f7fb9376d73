"""
Development settings for FacilityHub project.

These settings override the base settings for local development environments.
"""

from decouple import config

from .base import *  # noqa: F401,F403

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = config("SECRET_KEY", default="django-insecure-development-key-not-for-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config("DEBUG", default=True, cast=bool)

# Allow all hosts in development (for convenience)
ALLOWED_HOSTS = ["*"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": config("POSTGRES_DB", default="facilityhub"),
        "USER": config("POSTGRES_USER", default="facilityhub"),
        "PASSWORD": config("POSTGRES_PASSWORD", default="facilityhub"),
        "HOST": config("POSTGRES_HOST", default="localhost"),
        "PORT": config("POSTGRES_PORT", default="5432"),
        "CONN_MAX_AGE": 300,
        "OPTIONS": {
            "connect_timeout": 5,
            "sslmode": config("POSTGRES_SSL_MODE", default="disable"),
        },
    }
}

if config("USE_SQLITE", default=False, cast=bool):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        }
    }

# Local memory cache keeps the schedule lock working without Redis
# (single process only)
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "facilityhub-dev",
    }
}

LOGGING["loggers"]["apps"]["level"] = "DEBUG"  # noqa: F405
