"""Development settings."""

from .base import *  # noqa: F401,F403

DEBUG = True

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-not-for-production")  # noqa: F405

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

# Use the in-process cache when Redis is not running locally
if not os.environ.get("REDIS_URL"):  # noqa: F405
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }
