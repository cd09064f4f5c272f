"""Cart persistence: saving with quota fallback, loading with expiry and migration.

A cart is kept in the durable tier unless the visitor opted out of saving,
in which case it only lives in the session tier. When the durable tier is
full the cart is saved to the session tier instead and the visitor is told
it will not survive the session.
"""

import json
import logging
import time
from datetime import timedelta

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone
from django.utils.crypto import get_random_string

from .cart import CART_VERSION, DEFAULT_MAX_QUANTITY, Cart, InvalidCartData, format_timestamp
from .notifications import Notifier
from .storage import StorageError, StorageQuotaExceeded

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "aftek_shopping_cart"
DONT_SAVE_CART_KEY = "aftek_dont_save_cart"
WELCOMED_BACK_KEY = "aftek_welcomed_back"
DEVICE_ID_COOKIE = "aftek_device_id"

SIZE_WARNING_BYTES = 4 * 1024 * 1024
WELCOME_BACK_AFTER = timedelta(hours=1)

_BASE36 = "abcdefghijklmnopqrstuvwxyz0123456789"


def generate_device_id() -> str:
    return f"device_{get_random_string(9, _BASE36)}_{int(time.time() * 1000)}"


def serialize_cart(cart: Cart) -> str:
    return json.dumps(cart.to_dict(), cls=DjangoJSONEncoder, ensure_ascii=False)


def _stored_version(data: dict) -> int:
    try:
        return int(data.get("version") or 0)
    except (TypeError, ValueError):
        return 0


def _migrate_v0(data: dict, context: dict) -> dict:
    """Unversioned carts: normalize the item list and item field names."""
    raw_items = data.get("items") or []
    if not isinstance(raw_items, list):
        raise InvalidCartData("Cart items must be a list")
    items = []
    for item in raw_items:
        if not isinstance(item, dict):
            continue
        item = dict(item)
        if "quantity" not in item and "qty" in item:
            item["quantity"] = item.pop("qty")
        if not item.get("sku") and item.get("model"):
            item["sku"] = item["model"]
        items.append(item)
    return {**data, "items": items, "version": 1}


def _migrate_v1(data: dict, context: dict) -> dict:
    """Version 1 carts had no expiry, device or per-item maximum metadata."""
    now = context["now"]
    items = []
    for item in data.get("items") or []:
        if not isinstance(item, dict):
            continue
        item = dict(item)
        item.setdefault("image", "")
        item.setdefault("sku", "")
        if not item.get("maxQuantity"):
            item["maxQuantity"] = DEFAULT_MAX_QUANTITY
        items.append(item)
    return {
        **data,
        "items": items,
        "createdAt": data.get("createdAt") or format_timestamp(now),
        "lastUpdated": format_timestamp(now),
        "expiresAt": data.get("expiresAt") or format_timestamp(now + context["expiry"]),
        "deviceId": data.get("deviceId") or context["device_id"],
        "version": 2,
    }


# Stored version -> step that upgrades it by one version
MIGRATIONS = {
    0: _migrate_v0,
    1: _migrate_v1,
}


class CartPersistence:
    """Reads and writes the cart of one device.

    Args:
        durable: storage tier that survives the session
        session: session-only storage tier
        device_id: identifier stamped on new carts
        notifier: receives user-visible messages
        now: clock, ``django.utils.timezone.now`` by default
        expiry_days: retention window for new carts
    """

    def __init__(self, durable, session, device_id: str = "", notifier=None, now=timezone.now, expiry_days=None):
        self.durable = durable
        self.session = session
        self.device_id = device_id or generate_device_id()
        self.notifier = notifier or Notifier()
        self.now = now
        if expiry_days is None:
            expiry_days = settings.CART_EXPIRY_DAYS
        self.expiry = timedelta(days=expiry_days)
        self.last_seen_at = None

    def create_empty_cart(self) -> Cart:
        now = self.now()
        return Cart(
            created_at=now,
            last_updated=now,
            expires_at=now + self.expiry,
            device_id=self.device_id,
            version=CART_VERSION,
        )

    def get_privacy_preference(self) -> bool:
        try:
            return self.durable.get_item(DONT_SAVE_CART_KEY) == "true"
        except StorageError:
            return False

    def set_privacy_preference(self, dont_save: bool):
        """Opt in or out of durable cart storage, moving any stored cart."""
        if dont_save:
            self.durable.set_item(DONT_SAVE_CART_KEY, "true")
            existing = self.durable.get_item(CART_STORAGE_KEY)
            if existing:
                self.session.set_item(CART_STORAGE_KEY, existing)
                self.durable.remove_item(CART_STORAGE_KEY)
            return

        self.durable.remove_item(DONT_SAVE_CART_KEY)
        session_cart = self.session.get_item(CART_STORAGE_KEY)
        if session_cart:
            try:
                self.durable.set_item(CART_STORAGE_KEY, session_cart)
            except StorageQuotaExceeded as e:
                logger.warning("Cart stays in session storage: %s", e)
                return
            self.session.remove_item(CART_STORAGE_KEY)

    def save_cart_safely(self, cart: Cart) -> bool:
        """Write the cart, degrading to session storage when the durable tier is full.

        Returns:
            True if the cart was written to either tier
        """
        payload = serialize_cart(cart)

        try:
            if self.get_privacy_preference():
                self.session.set_item(CART_STORAGE_KEY, payload)
                return True

            if len(payload.encode("utf-8")) > SIZE_WARNING_BYTES:
                logger.warning("Cart size approaching storage limit for device %s", cart.device_id)
                self.notifier.warning("Cart is getting large - some features may be limited")

            self.durable.set_item(CART_STORAGE_KEY, payload)
            return True

        except StorageQuotaExceeded as e:
            logger.warning("Durable cart storage full: %s", e)
            self.notifier.error("Unable to save cart - storage full. Consider clearing browser data.")
            try:
                self.session.set_item(CART_STORAGE_KEY, payload)
            except StorageError as session_error:
                logger.error("Session cart storage failed: %s", session_error)
                self.notifier.error("Unable to save cart anywhere - storage completely full")
                return False
            self.notifier.info("Cart saved temporarily for this session only")
            return True

        except StorageError as e:
            logger.error("Error saving cart: %s", e)
            return False

    def migrate_cart(self, data: dict) -> Cart:
        """Upgrade a stored record to the current version, keeping its items."""
        context = {"now": self.now(), "expiry": self.expiry, "device_id": self.device_id}
        version = _stored_version(data)
        while version < CART_VERSION:
            step = MIGRATIONS.get(version)
            if step is None:
                raise InvalidCartData(f"No migration from cart version {version}")
            data = step(data, context)
            version = _stored_version(data)
        logger.info("Migrated cart for device %s to version %d", self.device_id, CART_VERSION)
        return Cart.from_dict(data)

    def _remove_stored_cart(self):
        for tier in (self.durable, self.session):
            try:
                tier.remove_item(CART_STORAGE_KEY)
            except StorageError as e:
                logger.error("Error removing stored cart from %s storage: %s", tier.name, e)

    def _read(self):
        try:
            raw = self.durable.get_item(CART_STORAGE_KEY)
        except StorageError:
            raw = None
        if raw:
            return raw, False
        return self.session.get_item(CART_STORAGE_KEY), True

    def load_cart(self) -> Cart | None:
        """Load the stored cart, or None if there is none or it has expired."""
        raw, from_session = self._read()
        if not raw:
            return None

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise InvalidCartData("Cart record must be an object")
            migrated = _stored_version(data) < CART_VERSION
            cart = self.migrate_cart(data) if migrated else Cart.from_dict(data)
        except ValueError as e:
            logger.error("Error loading cart: %s", e)
            self._remove_stored_cart()
            return None

        if cart.expires_at <= self.now():
            logger.info("Discarding expired cart for device %s", cart.device_id)
            self._remove_stored_cart()
            return None

        if cart.version > CART_VERSION:
            logger.warning("Stored cart version %d is newer than %d", cart.version, CART_VERSION)
            cart.version = CART_VERSION

        if migrated:
            self.save_cart_safely(cart)
            return cart

        self.last_seen_at = cart.last_updated
        cart.last_updated = self.now()
        if not from_session:
            self.save_cart_safely(cart)
        return cart

    def clear_all(self):
        """Remove the stored cart from every tier and forget the welcome-back flag."""
        self._remove_stored_cart()
        self.session.remove_item(WELCOMED_BACK_KEY)

    def cart_age(self, cart: Cart) -> int:
        """Whole days since the cart was created."""
        return abs(self.now() - cart.created_at).days

    def should_show_welcome_back(self, cart: Cart) -> bool:
        """Greet a returning visitor once per session, after an hour away."""
        if self.session.get_item(WELCOMED_BACK_KEY) == "true":
            return False
        if cart.is_empty:
            return False
        last_seen = self.last_seen_at or cart.last_updated
        return self.now() - last_seen >= WELCOME_BACK_AFTER

    def mark_welcome_back_shown(self):
        self.session.set_item(WELCOMED_BACK_KEY, "true")
