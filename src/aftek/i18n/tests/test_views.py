"""Tests for the language endpoint and the translation context processor."""

import json

import pytest
from django.test import Client, RequestFactory
from django.urls import reverse

from aftek.i18n.context_processors import translations


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.mark.django_db
class TestLanguageView:
    def test_default_language(self, client):
        response = client.get(reverse("i18n:language"))

        assert response.json() == {"language": "zh-Hant"}

    def test_change_language_is_kept_in_session(self, client):
        response = client.post(
            reverse("i18n:language"),
            data=json.dumps({"language": "ko"}),
            content_type="application/json",
        )

        assert response.json() == {"language": "ko"}
        assert client.get(reverse("i18n:language")).json() == {"language": "ko"}

    @pytest.mark.parametrize("body", ["{", json.dumps({"language": "fr"}), json.dumps({})])
    def test_bad_requests(self, client, body):
        response = client.post(reverse("i18n:language"), data=body, content_type="application/json")

        assert response.status_code == 400


@pytest.mark.django_db
class TestTranslationsContextProcessor:
    def test_exposes_translate_function(self):
        request = RequestFactory().get("/")
        request.session = {"aftek-language": "en"}

        context = translations(request)

        assert context["t"]("nav.products") == "Products"
        assert context["current_language"] == "en"
        assert ("ja", "日本語") in context["languages"]
