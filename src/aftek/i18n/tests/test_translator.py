"""Tests for the machine translation client."""

import httpx
import pytest

from aftek.i18n.translator import (
    GOOGLE_TRANSLATE_URL,
    Translator,
    is_auto_translated,
    translate_with_fallback,
)


@pytest.fixture
def translator(http_client):
    return Translator(api_url="https://libre.example/translate", google_api_key="", delay=0, http_client=http_client)


class TestFallback:
    def test_common_phrase_is_translated_from_table(self):
        result = translate_with_fallback("Save", "zh-Hant")

        assert result.translated_text == "儲存"
        assert result.service == "fallback"

    def test_unknown_text_gets_placeholder(self):
        result = translate_with_fallback("Dome cameras", "ja")

        assert result.translated_text == "[AUTO-TRANSLATED] Dome cameras"
        assert is_auto_translated(result.translated_text)
        assert result.confidence == 0.0


class TestTranslate:
    """Translating through LibreTranslate or Google."""

    def test_libre_request(self, translator, http_client):
        result = translator.translate("Shopping Cart", "zh-Hant")

        assert result.translated_text == "翻譯"
        assert result.service == "libre"
        http_client.post.assert_called_once_with(
            "https://libre.example/translate",
            json={"q": "Shopping Cart", "source": "en", "target": "zh-TW", "format": "text"},
            params=None,
        )

    def test_google_request_when_api_key_set(self, http_client, make_response):
        http_client.post.return_value = make_response(
            payload={"data": {"translations": [{"translatedText": "ショッピングカート"}]}}
        )
        translator = Translator(google_api_key="secret", delay=0, http_client=http_client)

        result = translator.translate("Shopping Cart", "ja")

        assert result.translated_text == "ショッピングカート"
        assert result.service == "google"
        args, kwargs = http_client.post.call_args
        assert args == (GOOGLE_TRANSLATE_URL,)
        assert kwargs["params"] == {"key": "secret"}

    def test_english_is_returned_unchanged(self, translator, http_client):
        result = translator.translate("Home", "en")

        assert result.translated_text == "Home"
        http_client.post.assert_not_called()

    def test_results_are_cached(self, translator, http_client):
        translator.translate("Shopping Cart", "ko")
        result = translator.translate("Shopping Cart", "ko")

        assert result.service == "cache"
        assert http_client.post.call_count == 1

    def test_force_refresh_skips_cache(self, translator, http_client):
        translator.translate("Shopping Cart", "ko")
        translator.translate("Shopping Cart", "ko", force_refresh=True)

        assert http_client.post.call_count == 2

    def test_network_error_falls_back(self, translator, http_client):
        http_client.post.side_effect = httpx.ConnectError("unreachable")

        result = translator.translate("Cancel", "ko")

        assert result.translated_text == "취소"
        assert result.service == "fallback"

    def test_http_error_gives_placeholder(self, translator, http_client, make_response):
        http_client.post.return_value = make_response(status_code=429)

        result = translator.translate("Dome cameras", "th")

        assert result.translated_text == "[AUTO-TRANSLATED] Dome cameras"

    def test_malformed_response_falls_back(self, translator, http_client, make_response):
        http_client.post.return_value = make_response(payload={"unexpected": True})

        assert translator.translate("Dome cameras", "vi").service == "placeholder"

    def test_failures_are_not_cached(self, translator, http_client, make_response):
        http_client.post.return_value = make_response(status_code=500)
        translator.translate("Dome cameras", "vi")
        http_client.post.return_value = make_response(payload={"translatedText": "Camera"})

        assert translator.translate("Dome cameras", "vi").translated_text == "Camera"

    def test_unsupported_language_uses_fallback(self, translator, http_client):
        result = translator.translate("Dome cameras", "fr")

        assert result.service == "placeholder"
        http_client.post.assert_not_called()

    def test_batch(self, translator):
        results = translator.translate_batch(["Home", "About"], "ja")

        assert [result.translated_text for result in results] == ["翻譯", "翻譯"]

    def test_context_manager_closes_client(self, http_client):
        with Translator(delay=0, http_client=http_client):
            pass

        http_client.close.assert_called_once()
