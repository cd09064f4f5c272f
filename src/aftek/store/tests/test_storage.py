"""Tests for the storage tiers."""

import pytest
from django.core.cache import cache

from aftek.store.storage import CacheStorage, MemoryStorage, SessionStorage, StorageQuotaExceeded


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


class TestCacheStorage:
    def test_values_are_namespaced_by_device(self):
        first = CacheStorage("device_one")
        second = CacheStorage("device_two")

        first.set_item("cart", "one")

        assert first.get_item("cart") == "one"
        assert second.get_item("cart") is None

    def test_remove_item(self):
        storage = CacheStorage("device_one")
        storage.set_item("cart", "one")

        storage.remove_item("cart")

        assert storage.get_item("cart") is None

    def test_quota_is_enforced_in_bytes(self):
        storage = CacheStorage("device_one", quota_bytes=4)

        with pytest.raises(StorageQuotaExceeded) as exc_info:
            storage.set_item("cart", "購物")

        assert exc_info.value.size == 6
        assert storage.get_item("cart") is None


class TestSessionStorage:
    def test_reads_and_writes_session(self):
        session = {}
        storage = SessionStorage(session)

        storage.set_item("cart", "{}")
        assert session == {"cart": "{}"}

        storage.remove_item("cart")
        assert storage.get_item("cart") is None


class TestMemoryStorage:
    def test_unlimited_without_quota(self):
        storage = MemoryStorage()

        storage.set_item("cart", "x" * 10_000)

        assert len(storage.get_item("cart")) == 10_000
