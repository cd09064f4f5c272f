"""Core views for the Aftek website."""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

from aftek.i18n.locales import Language

logger = logging.getLogger(__name__)


def health_check(request):
    """Health check endpoint for container orchestration."""
    try:
        # Check database connection
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")

        return JsonResponse({"status": "healthy", "database": "connected"})
    except DatabaseError as e:
        logger.error("Health check failed: %s", e)
        return JsonResponse(
            {"status": "unhealthy", "error": str(e)},
            status=503,
        )


def languages(request):
    """List the supported site languages with their native names."""
    return JsonResponse({
        "default": Language.default().value,
        "languages": [
            {"code": language.value, "name": language.label}
            for language in Language
        ],
    })
