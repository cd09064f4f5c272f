"""Context processors for translations."""

from .catalog import catalog_for_request
from .locales import Language


def translations(request):
    """Add the translation function and language choices to templates."""
    catalog = catalog_for_request(request)
    return {
        "t": catalog.t,
        "current_language": catalog.language,
        "languages": Language.choices,
    }
