"""Shared pytest fixtures for aftek.i18n tests."""

import json
from unittest.mock import MagicMock

import httpx
import pytest
from django.core.cache import cache

from aftek.i18n.catalog import reset_local_dictionaries


@pytest.fixture(autouse=True)
def clean_state():
    cache.clear()
    reset_local_dictionaries()
    yield
    cache.clear()
    reset_local_dictionaries()


@pytest.fixture
def write_locales(tmp_path):
    """Write ``{language: json_text_or_dict}`` into a locales directory."""

    def _write(files):
        directory = tmp_path / "locales"
        directory.mkdir(exist_ok=True)
        for language, content in files.items():
            if not isinstance(content, str):
                content = json.dumps(content, ensure_ascii=False)
            (directory / f"{language}.json").write_text(content, encoding="utf-8")
        return directory

    return _write


def _make_response(status_code=200, payload=None):
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def make_response():
    """Build mocked ``httpx.Response`` objects."""
    return _make_response


@pytest.fixture
def http_client():
    """A mocked ``httpx.Client`` answering LibreTranslate requests."""
    client = MagicMock(spec=httpx.Client)
    client.post.return_value = _make_response(payload={"translatedText": "翻譯"})
    return client
