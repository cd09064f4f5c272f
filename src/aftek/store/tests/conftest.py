"""Shared pytest fixtures for aftek.store tests."""

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from aftek.store.cart import Cart, CartItem
from aftek.store.notifications import Notifier
from aftek.store.persistence import CartPersistence
from aftek.store.storage import MemoryStorage
from aftek.store.store import CartStore


class Clock:
    """Controllable replacement for ``timezone.now``."""

    def __init__(self, start):
        self.current = start

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


class RecordingNotifier(Notifier):
    """Collect notifications as (level, message) pairs."""

    def __init__(self):
        self.sent = []

    def notify(self, level, message):
        super().notify(level, message)
        self.sent.append((level, message))

    @property
    def messages(self):
        return [message for _, message in self.sent]


@pytest.fixture
def clock():
    return Clock(datetime(2024, 3, 1, 12, 0, tzinfo=dt_timezone.utc))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def durable():
    return MemoryStorage(quota_bytes=5 * 1024 * 1024)


@pytest.fixture
def session():
    return MemoryStorage()


@pytest.fixture
def persistence(durable, session, notifier, clock):
    return CartPersistence(
        durable=durable,
        session=session,
        device_id="device_abc123xyz_1709294400000",
        notifier=notifier,
        now=clock,
        expiry_days=30,
    )


@pytest.fixture
def store(persistence, notifier, clock):
    return CartStore(persistence, notifier=notifier, now=clock, autosave_seconds=30)


@pytest.fixture
def product():
    """A product payload as the storefront sends it."""
    return {
        "id": "cam-100",
        "name": "Dome Camera",
        "price": "19.99",
        "image": "/img/cam.png",
        "model": "DC-100",
        "category": "cameras",
    }


@pytest.fixture
def limited_product():
    return {
        "id": "nvr-8",
        "name": "8 Channel NVR",
        "price": 250,
        "maxQuantity": 2,
    }


@pytest.fixture
def make_cart(clock):
    """Build a cart created at the clock's current time."""

    def _make(items=(), expires_in=timedelta(days=30), device_id="device_abc123xyz_1709294400000"):
        now = clock()
        return Cart(
            created_at=now,
            last_updated=now,
            expires_at=now + expires_in,
            device_id=device_id,
            items=[
                CartItem(id=item_id, name=name, price=Decimal(price), quantity=quantity)
                for item_id, name, price, quantity in items
            ],
        )

    return _make
