"""HTTP client for machine translation of missing website strings.

LibreTranslate is used by default. When a Google Translate API key is
configured the Google v2 endpoint is used instead. A failed call never
raises to the caller: the text falls back to a small table of common UI
phrases, and failing that to an ``[AUTO-TRANSLATED]`` placeholder that the
auditor counts separately from real translations.
"""

import hashlib
import logging
import time
from dataclasses import dataclass

import httpx
from django.conf import settings
from django.core.cache import cache

from .locales import Language

logger = logging.getLogger(__name__)

AUTO_TRANSLATED_PREFIX = "[AUTO-TRANSLATED]"
GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"
CACHE_SECONDS = 24 * 60 * 60
SOURCE_LANGUAGE = Language.EN.value

# Target codes per translation service
LANGUAGE_MAP = {
    "en": {"google": "en", "libre": "en"},
    "ja": {"google": "ja", "libre": "ja"},
    "ko": {"google": "ko", "libre": "ko"},
    "th": {"google": "th", "libre": "th"},
    "vi": {"google": "vi", "libre": "vi"},
    "zh-Hans": {"google": "zh-CN", "libre": "zh"},
    "zh-Hant": {"google": "zh-TW", "libre": "zh-TW"},
}

COMMON_TRANSLATIONS = {
    "Home": {
        "en": "Home", "ja": "ホーム", "ko": "홈", "th": "หน้าแรก",
        "vi": "Trang chủ", "zh-Hans": "首页", "zh-Hant": "首頁",
    },
    "About": {
        "en": "About", "ja": "会社概要", "ko": "회사소개", "th": "เกี่ยวกับเรา",
        "vi": "Giới thiệu", "zh-Hans": "关于我们", "zh-Hant": "關於我們",
    },
    "Products": {
        "en": "Products", "ja": "製品", "ko": "제품", "th": "ผลิตภัณฑ์",
        "vi": "Sản phẩm", "zh-Hans": "产品", "zh-Hant": "產品",
    },
    "Contact": {
        "en": "Contact", "ja": "お問い合わせ", "ko": "연락처", "th": "ติดต่อ",
        "vi": "Liên hệ", "zh-Hans": "联系", "zh-Hant": "聯絡",
    },
    "Loading...": {
        "en": "Loading...", "ja": "読み込み中...", "ko": "로딩 중...", "th": "กำลังโหลด...",
        "vi": "Đang tải...", "zh-Hans": "加载中...", "zh-Hant": "載入中...",
    },
    "Submit": {
        "en": "Submit", "ja": "送信", "ko": "제출", "th": "ส่ง",
        "vi": "Gửi", "zh-Hans": "提交", "zh-Hant": "提交",
    },
    "Cancel": {
        "en": "Cancel", "ja": "キャンセル", "ko": "취소", "th": "ยกเลิก",
        "vi": "Hủy", "zh-Hans": "取消", "zh-Hant": "取消",
    },
    "Save": {
        "en": "Save", "ja": "保存", "ko": "저장", "th": "บันทึก",
        "vi": "Lưu", "zh-Hans": "保存", "zh-Hant": "儲存",
    },
    "Edit": {
        "en": "Edit", "ja": "編集", "ko": "편집", "th": "แก้ไข",
        "vi": "Chỉnh sửa", "zh-Hans": "编辑", "zh-Hant": "編輯",
    },
    "Delete": {
        "en": "Delete", "ja": "削除", "ko": "삭제", "th": "ลบ",
        "vi": "Xóa", "zh-Hans": "删除", "zh-Hant": "刪除",
    },
}


class TranslationServiceError(Exception):
    """Error from the remote translation service."""


@dataclass
class TranslationResult:
    """Result of translating one string."""

    translated_text: str
    source_language: str
    target_language: str
    confidence: float
    service: str


def placeholder(text: str) -> str:
    return f"{AUTO_TRANSLATED_PREFIX} {text}"


def is_auto_translated(value) -> bool:
    return isinstance(value, str) and value.startswith(AUTO_TRANSLATED_PREFIX)


def translate_with_fallback(text: str, target_language: str) -> TranslationResult:
    """Translate from the built-in phrase table, or return the placeholder."""
    known = COMMON_TRANSLATIONS.get(text, {}).get(target_language)
    if known:
        return TranslationResult(known, SOURCE_LANGUAGE, target_language, 1.0, "fallback")
    return TranslationResult(placeholder(text), SOURCE_LANGUAGE, target_language, 0.0, "placeholder")


class Translator:
    """Machine translation client with caching and a fixed fallback.

    Args:
        api_url: LibreTranslate endpoint
        google_api_key: when set, Google Translate is used instead
        timeout: request timeout in seconds
        delay: pause between batch requests, in seconds
        use_cache: cache results in the Django cache for 24 hours
        http_client: optional preconfigured ``httpx.Client``
    """

    def __init__(
        self,
        api_url: str | None = None,
        google_api_key: str | None = None,
        timeout: float | None = None,
        delay: float | None = None,
        use_cache: bool = True,
        http_client: httpx.Client | None = None,
    ):
        self.api_url = api_url or settings.TRANSLATION_API_URL
        self.google_api_key = google_api_key if google_api_key is not None else settings.GOOGLE_TRANSLATE_API_KEY
        self.timeout = timeout if timeout is not None else settings.TRANSLATION_API_TIMEOUT
        self.delay = delay if delay is not None else settings.TRANSLATION_REQUEST_DELAY
        self.use_cache = use_cache
        self._client = http_client

    @property
    def service(self) -> str:
        return "google" if self.google_api_key else "libre"

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _cache_key(self, text: str, target_language: str) -> str:
        digest = hashlib.sha1(text.encode("utf-8")).hexdigest()
        return f"aftek:translation:{self.service}:{target_language}:{digest}"

    def _request_libre(self, text: str, target_language: str) -> TranslationResult:
        payload = {
            "q": text,
            "source": SOURCE_LANGUAGE,
            "target": LANGUAGE_MAP[target_language]["libre"],
            "format": "text",
        }
        data = self._post(self.api_url, payload)
        try:
            translated = data["translatedText"]
        except (KeyError, TypeError) as e:
            raise TranslationServiceError(f"Malformed LibreTranslate response: {data!r}") from e
        # LibreTranslate does not report confidence
        return TranslationResult(translated, SOURCE_LANGUAGE, target_language, 0.8, "libre")

    def _request_google(self, text: str, target_language: str) -> TranslationResult:
        payload = {
            "q": text,
            "source": SOURCE_LANGUAGE,
            "target": LANGUAGE_MAP[target_language]["google"],
            "format": "text",
        }
        data = self._post(GOOGLE_TRANSLATE_URL, payload, params={"key": self.google_api_key})
        try:
            translation = data["data"]["translations"][0]
            translated = translation["translatedText"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationServiceError(f"Malformed Google Translate response: {data!r}") from e
        confidence = translation.get("confidence", 0.9)
        return TranslationResult(translated, SOURCE_LANGUAGE, target_language, confidence, "google")

    def _post(self, url: str, payload: dict, params: dict | None = None) -> dict:
        try:
            response = self._get_client().post(url, json=payload, params=params)
        except httpx.RequestError as e:
            raise TranslationServiceError(f"Translation request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise TranslationServiceError(f"Translation API error: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise TranslationServiceError("Translation API returned invalid JSON") from e

    def translate(self, text: str, target_language: str, force_refresh: bool = False) -> TranslationResult:
        """Translate English text into the target language.

        Returns:
            TranslationResult; ``service`` is "fallback" or "placeholder" when
            the remote call failed.
        """
        target_language = str(target_language)
        if target_language == SOURCE_LANGUAGE:
            return TranslationResult(text, SOURCE_LANGUAGE, target_language, 1.0, "identity")

        cache_key = self._cache_key(text, target_language)
        if self.use_cache and not force_refresh:
            cached = cache.get(cache_key)
            if cached is not None:
                return TranslationResult(cached, SOURCE_LANGUAGE, target_language, 0.9, "cache")

        if target_language not in LANGUAGE_MAP:
            logger.warning("No translation service mapping for language '%s'", target_language)
            return translate_with_fallback(text, target_language)

        try:
            if self.google_api_key:
                result = self._request_google(text, target_language)
            else:
                result = self._request_libre(text, target_language)
        except TranslationServiceError as e:
            logger.warning("Translation failed for %r to %s, using fallback: %s", text, target_language, e)
            return translate_with_fallback(text, target_language)

        if self.use_cache:
            cache.set(cache_key, result.translated_text, CACHE_SECONDS)
        return result

    def translate_batch(self, texts, target_language: str) -> list:
        """Translate several texts, pausing between requests."""
        results = []
        for index, text in enumerate(texts):
            results.append(self.translate(text, target_language))
            if self.delay and index < len(texts) - 1:
                time.sleep(self.delay)
        return results
