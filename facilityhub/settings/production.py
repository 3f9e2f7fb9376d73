"""
Production settings for FacilityHub project.

These settings override the base settings for production environments.
"""

from decouple import config

from .base import *  # noqa: F401,F403

DEBUG = config("DEBUG", default=False, cast=bool)

SECRET_KEY = config("SECRET_KEY", default="")
if not SECRET_KEY:
    raise ValueError("SECRET_KEY environment variable not set!")

SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY  # noqa: F405

ALLOWED_HOSTS = config(
    "ALLOWED_HOSTS", default="", cast=lambda v: [s.strip() for s in v.split(",") if s.strip()]
)

DATABASES["default"]["CONN_MAX_AGE"] = config("DB_MAX_LIFETIME", default=1800, cast=int)  # noqa: F405

# Security
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = config("SECURE_SSL_REDIRECT", default=True, cast=bool)
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_CONTENT_TYPE_NOSNIFF = True

REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = (  # noqa: F405
    "rest_framework.renderers.JSONRenderer",
)

LOGGING["handlers"]["console"]["level"] = "WARNING"  # noqa: F405
