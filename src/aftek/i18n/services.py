"""Service layer for translation rows in the content database.

Admin tooling and management commands should call these functions instead
of manipulating ``WebsiteText`` directly.
"""

import logging

from django.db import DatabaseError, transaction

from .locales import Language, LocaleDictionary
from .models import WebsiteText, section_for_key

logger = logging.getLogger(__name__)


def _require_language(language) -> str:
    resolved = Language.from_code(language)
    if resolved is None:
        raise ValueError(f"Unsupported language: {language}")
    return resolved.value


def save_translation(key: str, language, value: str) -> WebsiteText:
    """Insert or update the translation of a key for a language.

    Raises:
        ValueError: If the language is not supported
        DatabaseError: If the write fails
    """
    language = _require_language(language)
    if isinstance(value, list):
        value = ", ".join(str(item) for item in value)

    try:
        text, _ = WebsiteText.objects.update_or_create(
            key=key,
            language=language,
            defaults={"value": value, "section": section_for_key(key)},
        )
    except DatabaseError:
        logger.exception("Error saving translation %s:%s", language, key)
        raise
    return text


def get_translation(key: str, language) -> str | None:
    """Read one translation, or None when absent or unreadable."""
    try:
        return (
            WebsiteText.objects.filter(key=key, language=_require_language(language))
            .values_list("value", flat=True)
            .first()
        )
    except DatabaseError as e:
        logger.error("Error getting translation %s:%s: %s", language, key, e)
        return None


def import_dictionary(dictionary: LocaleDictionary) -> tuple:
    """Upsert every entry of a locale dictionary.

    Returns:
        (success_count, error_count)
    """
    language = _require_language(dictionary.language)
    success_count = error_count = 0

    for key, value in dictionary.entries.items():
        try:
            with transaction.atomic():
                save_translation(key, language, value)
            success_count += 1
        except DatabaseError as e:
            logger.error("Error upserting %s:%s: %s", language, key, e)
            error_count += 1

    logger.info(
        "Imported %s translations: %d successful, %d errors",
        language, success_count, error_count,
    )
    return success_count, error_count


def database_dictionaries(languages=None) -> dict:
    """Translation rows grouped into one LocaleDictionary per language."""
    codes = [_require_language(code) for code in languages] if languages else [lang.value for lang in Language]
    dictionaries = {code: LocaleDictionary(language=code) for code in codes}
    for key, language, value in WebsiteText.objects.filter(language__in=codes).values_list("key", "language", "value"):
        dictionaries[language].set(key, value)
    return dictionaries


def auto_translate_missing(keys, target_language, translator, save_to_database: bool = True) -> dict:
    """Translate keys from their stored English values.

    Returns:
        ``{key: translated_text}`` for each key that had an English source
    """
    target_language = _require_language(target_language)
    results = {}

    for key in keys:
        english = get_translation(key, Language.EN)
        if not english:
            logger.warning("No English translation found for key: %s", key)
            continue

        translated = translator.translate(english, target_language).translated_text
        results[key] = translated
        if save_to_database:
            save_translation(key, target_language, translated)

    return results
