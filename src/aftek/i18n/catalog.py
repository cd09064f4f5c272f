"""Layered translation lookup for rendering pages.

Lookup order for ``t(key)``:

1. values loaded for the current language (database rows over local files)
2. the bundled locale file for the current language
3. the built-in fallback table (current language, then zh-Hant, then en)
4. the key itself
"""

import logging

from django.conf import settings
from django.db import DatabaseError

from .locales import Language, LocaleDictionary, LocaleFileError, load_locale_dir

logger = logging.getLogger(__name__)

SESSION_LANGUAGE_KEY = "aftek-language"

# Critical navigation items, used when neither the database nor the
# bundled files provide a value
FALLBACK_TRANSLATIONS = {
    "nav.home": {
        "en": "Home", "ja": "ホーム", "ko": "홈", "th": "หน้าแรก",
        "vi": "Trang chủ", "zh-Hans": "首页", "zh-Hant": "首頁",
    },
    "nav.about": {
        "en": "About", "ja": "会社概要", "ko": "회사소개", "th": "เกี่ยวกับเรา",
        "vi": "Về chúng tôi", "zh-Hans": "关于我们", "zh-Hant": "關於我們",
    },
    "nav.products": {
        "en": "Products", "ja": "製品", "ko": "제품", "th": "ผลิตภัณฑ์",
        "vi": "Sản phẩm", "zh-Hans": "产品", "zh-Hant": "產品",
    },
    "nav.projects": {
        "en": "Projects", "ja": "プロジェクト", "ko": "프로젝트", "th": "โครงการ",
        "vi": "Dự án", "zh-Hans": "项目", "zh-Hant": "專案",
    },
    "nav.articles": {
        "en": "Articles", "ja": "記事", "ko": "기사", "th": "บทความ",
        "vi": "Bài viết", "zh-Hans": "文章", "zh-Hant": "文章",
    },
    "nav.contact": {
        "en": "Contact", "ja": "お問い合わせ", "ko": "연락처", "th": "ติดต่อ",
        "vi": "Liên hệ", "zh-Hans": "联系", "zh-Hant": "聯絡",
    },
    "nav.guide": {
        "en": "Guide", "ja": "ガイド", "ko": "가이드", "th": "คู่มือ",
        "vi": "Hướng dẫn", "zh-Hans": "指南", "zh-Hant": "指南",
    },
}


def _display(value) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return value


def fetch_database_translations(language: str) -> dict:
    """Read ``WebsiteText`` rows for a language as ``{key: value}``."""
    from .models import WebsiteText

    rows = WebsiteText.objects.filter(language=language).values_list("key", "value")
    return dict(rows)


class TranslationCatalog:
    """Translations for one language at a time.

    Args:
        local_dictionaries: ``{language: LocaleDictionary}`` bundled with the site
        fallback: ``{key: {language: value}}`` last-resort table
        fetch_remote: callable returning ``{key: value}`` for a language;
            defaults to reading ``WebsiteText`` rows
    """

    def __init__(self, local_dictionaries=None, fallback=None, fetch_remote=fetch_database_translations):
        self.local_dictionaries = {str(k): v for k, v in (local_dictionaries or {}).items()}
        self.fallback = FALLBACK_TRANSLATIONS if fallback is None else fallback
        self.fetch_remote = fetch_remote
        self.reset()

    @classmethod
    def from_directory(cls, directory=None, **kwargs):
        """Build a catalog from the locale files in a directory.

        An unreadable directory leaves the catalog with only the fallback table.
        """
        directory = directory or settings.LOCALES_DIR
        try:
            dictionaries = load_locale_dir(directory)
        except LocaleFileError as e:
            logger.error("Could not load local translations: %s", e)
            dictionaries = {}
        return cls(dictionaries, **kwargs)

    def reset(self):
        """Forget loaded translations and return to the default language."""
        self.language = Language.default().value
        self.translations = {}
        self.loaded = False

    def _local(self, language: str) -> LocaleDictionary:
        return (
            self.local_dictionaries.get(language)
            or self.local_dictionaries.get(Language.default().value)
            or LocaleDictionary(language=language)
        )

    def load(self, language=None):
        """Load translations for a language, database rows over local files."""
        resolved = Language.from_code(language) or Language.default()
        self.language = resolved.value

        merged = dict(self._local(self.language).entries)
        if self.fetch_remote is not None:
            try:
                merged.update(self.fetch_remote(self.language))
            except DatabaseError as e:
                logger.error("Error fetching translations for %s: %s", self.language, e)

        self.translations = merged
        self.loaded = True
        return self

    def t(self, key) -> str:
        """Translate a key for the current language."""
        key = str(key)

        if self.loaded:
            value = self.translations.get(key)
            if value:
                return _display(value)

        value = self._local(self.language).get(key)
        if value:
            return _display(value)

        options = self.fallback.get(key, {})
        value = options.get(self.language) or options.get(Language.ZH_HANT.value) or options.get(Language.EN.value)
        if value:
            return _display(value)

        return key

    __call__ = t


_default_dictionaries = None


def get_local_dictionaries():
    """Bundled locale files, read once per process."""
    global _default_dictionaries

    if _default_dictionaries is None:
        try:
            _default_dictionaries = load_locale_dir(settings.LOCALES_DIR)
        except LocaleFileError as e:
            logger.error("Could not load local translations: %s", e)
            _default_dictionaries = {}
    return _default_dictionaries


def reset_local_dictionaries():
    global _default_dictionaries
    _default_dictionaries = None


def get_request_language(request) -> Language:
    """The language chosen for this session, or the site default."""
    session = getattr(request, "session", None)
    code = session.get(SESSION_LANGUAGE_KEY) if session is not None else None
    return Language.from_code(code) or Language.default()


def change_language(request, language) -> Language:
    """Persist a language choice in the session.

    Raises:
        ValueError: If the language is not supported
    """
    resolved = Language.from_code(language)
    if resolved is None:
        raise ValueError(f"Unsupported language: {language}")
    request.session[SESSION_LANGUAGE_KEY] = resolved.value
    return resolved


def catalog_for_request(request) -> TranslationCatalog:
    """A catalog loaded for the request's language, cached on the request."""
    catalog = getattr(request, "_translation_catalog", None)
    language = get_request_language(request)
    if catalog is None or catalog.language != language.value:
        catalog = TranslationCatalog(get_local_dictionaries()).load(language)
        request._translation_catalog = catalog
    return catalog
