"""Key/value storage tiers for cart persistence.

Every tier exposes ``get_item``, ``set_item`` and ``remove_item`` over string
values:

- ``CacheStorage``: durable, kept in the Django cache and namespaced by
  device id, limited by a byte quota
- ``SessionStorage``: lives only as long as the visitor's session
- ``MemoryStorage``: a plain dict, for scripts and tests
"""

import logging

from django.core.cache import caches

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A storage tier failed to read or write."""


class StorageQuotaExceeded(StorageError):
    """Writing the value would exceed the tier's quota."""

    def __init__(self, key: str, size: int, quota: int):
        self.key = key
        self.size = size
        self.quota = quota
        super().__init__(f"Value for '{key}' is {size} bytes, quota is {quota} bytes")


class Storage:
    """Base storage tier with an optional byte quota."""

    name = "storage"

    def __init__(self, quota_bytes: int | None = None):
        self.quota_bytes = quota_bytes

    def check_quota(self, key: str, value: str):
        if self.quota_bytes is None:
            return
        size = len(value.encode("utf-8"))
        if size > self.quota_bytes:
            raise StorageQuotaExceeded(key, size, self.quota_bytes)

    def get_item(self, key: str) -> str | None:
        raise NotImplementedError

    def set_item(self, key: str, value: str):
        raise NotImplementedError

    def remove_item(self, key: str):
        raise NotImplementedError


class MemoryStorage(Storage):
    name = "memory"

    def __init__(self, quota_bytes: int | None = None):
        super().__init__(quota_bytes)
        self.data = {}

    def get_item(self, key):
        return self.data.get(key)

    def set_item(self, key, value):
        self.check_quota(key, value)
        self.data[key] = value

    def remove_item(self, key):
        self.data.pop(key, None)


class CacheStorage(Storage):
    """Durable storage in a Django cache, one namespace per device.

    Args:
        namespace: usually the device id
        alias: Django cache alias
        quota_bytes: largest value accepted
        timeout: cache timeout in seconds, None keeps values until removed
    """

    name = "durable"

    def __init__(self, namespace: str, alias: str = "default", quota_bytes: int | None = None, timeout=None):
        super().__init__(quota_bytes)
        self.namespace = namespace
        self.alias = alias
        self.timeout = timeout

    @property
    def cache(self):
        return caches[self.alias]

    def _key(self, key: str) -> str:
        return f"aftek:storage:{self.namespace}:{key}"

    def get_item(self, key):
        try:
            return self.cache.get(self._key(key))
        except Exception as e:
            logger.exception(f"Failed to read {key} from cache storage: {e}")
            raise StorageError(str(e)) from e

    def set_item(self, key, value):
        self.check_quota(key, value)
        try:
            self.cache.set(self._key(key), value, self.timeout)
        except Exception as e:
            logger.exception(f"Failed to write {key} to cache storage: {e}")
            raise StorageError(str(e)) from e

    def remove_item(self, key):
        try:
            self.cache.delete(self._key(key))
        except Exception as e:
            logger.exception(f"Failed to remove {key} from cache storage: {e}")
            raise StorageError(str(e)) from e


class SessionStorage(Storage):
    """Session-only storage backed by the request's Django session."""

    name = "session"

    def __init__(self, session, quota_bytes: int | None = None):
        super().__init__(quota_bytes)
        self.session = session

    def get_item(self, key):
        return self.session.get(key)

    def set_item(self, key, value):
        self.check_quota(key, value)
        self.session[key] = value

    def remove_item(self, key):
        self.session.pop(key, None)
