"""Supported languages and locale dictionary files.

Locale dictionaries are JSON files named after their language code
(``en.json``, ``zh-Hant.json``, ...). Nested objects are flattened into
dotted keys, so ``{"nav": {"home": "Home"}}`` and ``{"nav.home": "Home"}``
describe the same entry. Keys that occur more than once in a file are
reported through ``LocaleDictionary.duplicates``; the last occurrence wins,
and a repeated object replaces the earlier object as a whole.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from django.db import models

logger = logging.getLogger(__name__)


class Language(models.TextChoices):
    """Languages the website is published in."""

    EN = "en", "English"
    JA = "ja", "日本語"
    KO = "ko", "한국어"
    TH = "th", "ไทย"
    VI = "vi", "Tiếng Việt"
    ZH_HANS = "zh-Hans", "简体中文"
    ZH_HANT = "zh-Hant", "繁體中文"

    @classmethod
    def default(cls):
        return cls.ZH_HANT

    @classmethod
    def from_code(cls, code):
        """Resolve a language code case-insensitively, or None if unsupported."""
        if not code:
            return None
        wanted = str(code).strip().lower()
        for language in cls:
            if language.value.lower() == wanted:
                return language
        return None


class RequiredKey(models.TextChoices):
    """Keys every locale dictionary must define."""

    # Navigation
    NAV_HOME = "nav.home"
    NAV_ABOUT = "nav.about"
    NAV_PRODUCTS = "nav.products"
    NAV_PROJECTS = "nav.projects"
    NAV_ARTICLES = "nav.articles"
    NAV_CONTACT = "nav.contact"
    NAV_GUIDE = "nav.guide"

    # Home page
    HOME_HERO_TITLE = "home.hero.title"
    HOME_HERO_SUBTITLE = "home.hero.subtitle"
    HOME_HERO_ABOUT_BTN = "home.hero.aboutBtn"
    HOME_HERO_COMPANY_PROFILE_BTN = "home.hero.companyProfileBtn"
    HOME_MISSION_TITLE = "home.mission.title"
    HOME_MISSION_PARAGRAPH1 = "home.mission.paragraph1"
    HOME_MISSION_PARAGRAPH2 = "home.mission.paragraph2"
    HOME_SERVICES_TITLE = "home.services.title"
    HOME_SERVICES_SUBTITLE = "home.services.subtitle"

    # Common UI
    UI_LEARN_MORE = "ui.learnMore"
    UI_VIEW_ALL = "ui.viewAll"
    UI_DOWNLOAD = "ui.download"
    UI_READ_MORE = "ui.readMore"
    UI_CONTACT_US = "ui.contactUs"
    UI_GET_QUOTE = "ui.getQuote"

    # Footer
    FOOTER_CONTACT_TITLE = "footer.contact.title"
    FOOTER_CONTACT_PHONE = "footer.contact.phone"
    FOOTER_CONTACT_EMAIL = "footer.contact.email"
    FOOTER_CONTACT_HOURS = "footer.contact.hours"
    FOOTER_LINKS_TITLE = "footer.links.title"
    FOOTER_COMPANY_TITLE = "footer.company.title"
    FOOTER_COPYRIGHT = "footer.copyright"
    FOOTER_PRIVACY = "footer.privacy"
    FOOTER_TERMS = "footer.terms"

    # Pages
    ABOUT_TITLE = "about.title"
    PRODUCTS_TITLE = "products.title"
    PROJECTS_TITLE = "projects.title"
    ARTICLES_TITLE = "articles.title"
    CONTACT_TITLE = "contact.title"

    # Loading states
    LOADING_GENERAL = "loading.general"
    LOADING_PRODUCTS = "loading.products"
    LOADING_ARTICLES = "loading.articles"
    LOADING_PROJECTS = "loading.projects"

    # Error pages
    ERROR_NOT_FOUND_TITLE = "error.notFound.title"
    ERROR_NOT_FOUND_MESSAGE = "error.notFound.message"
    ERROR_NOT_FOUND_HOME_BTN = "error.notFound.homeBtn"


REQUIRED_KEYS = tuple(key.value for key in RequiredKey)


class LocaleFileError(Exception):
    """A locale file could not be read or is not a JSON object."""


@dataclass
class LocaleDictionary:
    """Flat key/value translations for one language."""

    language: str
    entries: dict = field(default_factory=dict)
    duplicates: list = field(default_factory=list)
    source: Path | None = None

    def __contains__(self, key):
        return str(key) in self.entries

    def __len__(self):
        return len(self.entries)

    def get(self, key, default=None):
        return self.entries.get(str(key), default)

    def keys(self):
        return self.entries.keys()

    def has_value(self, key) -> bool:
        """True when the key exists with a non-blank value."""
        value = self.entries.get(str(key))
        if isinstance(value, list):
            return any(str(item).strip() for item in value)
        return bool(value and str(value).strip())

    def set(self, key, value):
        self.entries[str(key)] = value


class _Pairs(list):
    """Ordered (key, value) pairs of one JSON object, duplicates preserved."""


def _normalize_value(value):
    if isinstance(value, list):
        return [_normalize_value(item) for item in value]
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _flatten(pairs, prefix, entries, duplicates) -> list:
    """Flatten one object into ``entries``; returns the dotted keys it produced.

    A key repeated within the same object replaces everything its earlier
    occurrence produced, as a repeated property does in a JavaScript object.
    """
    produced_by = {}
    for key, value in pairs:
        full_key = f"{prefix}{key}"
        if key in produced_by:
            duplicates.append(full_key)
            for old_key in produced_by.pop(key):
                entries.pop(old_key, None)

        if isinstance(value, _Pairs):
            produced_by[key] = _flatten(value, f"{full_key}.", entries, duplicates)
            continue
        if full_key in entries:
            duplicates.append(full_key)
        entries[full_key] = _normalize_value(value)
        produced_by[key] = [full_key]
    return [full_key for produced in produced_by.values() for full_key in produced]


def parse_locale(text: str, language: str, source: Path | None = None) -> LocaleDictionary:
    """Parse JSON locale text into a flat dictionary, recording duplicate keys."""
    try:
        document = json.loads(text, object_pairs_hook=_Pairs)
    except json.JSONDecodeError as e:
        raise LocaleFileError(f"Invalid JSON in locale '{language}': {e}") from e

    if not isinstance(document, _Pairs):
        raise LocaleFileError(f"Locale '{language}' must be a JSON object")

    entries = {}
    duplicates = []
    _flatten(document, "", entries, duplicates)
    return LocaleDictionary(language=language, entries=entries, duplicates=duplicates, source=source)


def load_locale_file(path) -> LocaleDictionary:
    """Load one locale file; the language code is the file stem."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LocaleFileError(f"Cannot read locale file {path}: {e}") from e
    return parse_locale(text, language=path.stem, source=path)


def load_locale_dir(directory) -> dict:
    """Load every ``*.json`` locale in a directory, keyed by language code."""
    directory = Path(directory)
    if not directory.is_dir():
        raise LocaleFileError(f"Locales directory not found: {directory}")

    dictionaries = {}
    for path in sorted(directory.glob("*.json")):
        dictionary = load_locale_file(path)
        if Language.from_code(dictionary.language) is None:
            logger.warning("Loading locale '%s' which is not a supported site language", dictionary.language)
        dictionaries[dictionary.language] = dictionary
    logger.debug("Loaded %d locale files from %s", len(dictionaries), directory)
    return dictionaries


def write_locale_file(dictionary: LocaleDictionary, path) -> Path:
    """Write a dictionary back out as flat JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(dictionary.entries, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return path
