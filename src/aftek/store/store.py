"""The cart store: cart state plus the operations the storefront calls.

One ``CartStore`` serves one device. Mutations notify the visitor and save
immediately; ``flush_if_due`` gives the periodic autosave a place to run at
the end of each request.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from .cart import Cart, CartItem
from .notifications import Notifier

logger = logging.getLogger(__name__)

ADDED_NOTIFICATION_SECONDS = 5


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


class CartStore:
    """Owns the cart of one device and keeps it persisted.

    Args:
        persistence: ``CartPersistence`` for this device
        notifier: receives user-visible messages, defaults to the persistence's
        now: clock
        autosave_seconds: interval between autosaves of a non-empty cart
    """

    def __init__(self, persistence, notifier=None, now=timezone.now, autosave_seconds=None):
        self.persistence = persistence
        self.notifier = notifier or persistence.notifier or Notifier()
        self.now = now
        if autosave_seconds is None:
            autosave_seconds = settings.CART_AUTOSAVE_SECONDS
        self.autosave_interval = timedelta(seconds=autosave_seconds)
        self._cart = None
        self._dirty = False
        self._last_saved_at = None
        self._added = []

    @property
    def cart(self) -> Cart:
        if self._cart is None:
            self._cart = self._initialize()
        return self._cart

    def _initialize(self) -> Cart:
        cart = self.persistence.load_cart()
        if cart is None:
            return self.persistence.create_empty_cart()

        self._last_saved_at = self.now()
        if self.persistence.should_show_welcome_back(cart):
            self.notifier.info(self._welcome_back_message(cart))
            self.persistence.mark_welcome_back_shown()
        return cart

    def _welcome_back_message(self, cart: Cart) -> str:
        last_seen = self.persistence.last_seen_at or cart.last_updated
        elapsed = self.now() - last_seen
        if elapsed.days >= 1:
            ago = _plural(elapsed.days, "day")
        else:
            ago = _plural(int(elapsed.total_seconds() // 3600), "hour")
        return f"Welcome back! You have {_plural(cart.total_items, 'item')} in your cart from {ago} ago."

    def save(self) -> bool:
        self.cart.last_updated = self.now()
        saved = self.persistence.save_cart_safely(self.cart)
        if saved:
            self._dirty = False
            self._last_saved_at = self.now()
        return saved

    def flush_if_due(self) -> bool:
        """Save a cart with unsaved changes, or a non-empty cart whose autosave is due.

        Returns:
            True if a save was attempted and succeeded
        """
        if self._cart is None:
            return False
        if self._dirty:
            return self.save()
        if self._cart.is_empty:
            return False
        if self._last_saved_at is None or self.now() - self._last_saved_at >= self.autosave_interval:
            return self.save()
        return False

    def add(self, product: dict):
        """Add one unit of a product payload to the cart."""
        item = CartItem.from_product(product)
        change = self.cart.add(item)

        if change.capped:
            self.notifier.warning(f"Maximum quantity ({change.item.max_quantity}) reached for {change.item.name}")
            return change

        self.notifier.success(f"{item.name} added to cart")
        self._added.append((item.id, self.now()))
        self._dirty = True
        self.save()
        logger.info("Added %s to cart for device %s", item.id, self.persistence.device_id)
        return change

    def update_quantity(self, item_id, quantity: int):
        change = self.cart.update_quantity(item_id, quantity)
        if change.capped:
            self.notifier.warning(f"Maximum quantity ({change.item.max_quantity}) reached for {change.item.name}")
        if change.changed:
            self._dirty = True
            self.save()
        return change

    def remove(self, item_id):
        change = self.cart.remove(item_id)
        if change.changed:
            self.notifier.info("Item removed from cart")
            self._dirty = True
            self.save()
        return change

    def clear(self) -> bool:
        """Empty the cart and wipe it from storage.

        Returns:
            False if the cart was already empty
        """
        if self.cart.is_empty:
            self.notifier.info("Cart is already empty")
            return False

        self.persistence.clear_all()
        self._cart = self.persistence.create_empty_cart()
        self._dirty = False
        self._added = []
        self.notifier.success("Cart cleared successfully")
        return True

    def is_in_cart(self, item_id) -> bool:
        return self.cart.find(item_id) is not None

    def get_item_quantity(self, item_id) -> int:
        item = self.cart.find(item_id)
        return item.quantity if item else 0

    def cart_age(self) -> int:
        return self.persistence.cart_age(self.cart)

    def is_expired(self) -> bool:
        return self.cart.expires_at <= self.now()

    def notifications(self) -> list:
        """Ids of items added in the last few seconds."""
        cutoff = self.now() - timedelta(seconds=ADDED_NOTIFICATION_SECONDS)
        self._added = [(item_id, at) for item_id, at in self._added if at > cutoff]
        return [item_id for item_id, _ in self._added]

    def to_dict(self) -> dict:
        data = self.cart.to_dict()
        data["cartAge"] = self.cart_age()
        data["isExpired"] = self.is_expired()
        return data
