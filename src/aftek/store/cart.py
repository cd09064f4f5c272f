"""Shopping cart data model.

Totals are properties computed from the line items, so they can never drift
from the items they describe. The persisted record uses the camelCase keys
the storefront scripts read::

    {"items": [...], "totalItems": 3, "totalPrice": "59.97",
     "createdAt": "...", "lastUpdated": "...", "expiresAt": "...",
     "deviceId": "device_...", "version": 2}
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal, InvalidOperation

from django.utils import timezone
from django.utils.dateparse import parse_datetime

CART_VERSION = 2
DEFAULT_MAX_QUANTITY = 99


class InvalidCartData(ValueError):
    """A stored cart record could not be parsed."""


def to_decimal(value) -> Decimal:
    """Parse a unit price; it must be a finite, non-negative number."""
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InvalidCartData(f"Invalid price: {value!r}") from e
    if not price.is_finite() or price < 0:
        raise InvalidCartData(f"Invalid price: {value!r}")
    return price


def to_max_quantity(value) -> int:
    if value is None or value == "":
        return DEFAULT_MAX_QUANTITY
    try:
        max_quantity = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidCartData(f"Invalid maximum quantity: {value!r}") from e
    if max_quantity < 1:
        raise InvalidCartData(f"Maximum quantity must be at least 1: {value!r}")
    return max_quantity


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parse_datetime(str(value))
        except ValueError as e:
            raise InvalidCartData(f"Invalid timestamp: {value!r}") from e
        if parsed is None:
            raise InvalidCartData(f"Invalid timestamp: {value!r}")
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


@dataclass
class CartItem:
    """One product line in the cart."""

    id: str
    name: str
    price: Decimal
    quantity: int = 1
    image: str = ""
    sku: str = ""
    category: str | None = None
    max_quantity: int = DEFAULT_MAX_QUANTITY

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_product(cls, product: dict):
        """Build a single-unit line from a product payload."""
        if not product.get("id"):
            raise InvalidCartData("Product id is required")
        return cls(
            id=str(product["id"]),
            name=str(product.get("name") or ""),
            price=to_decimal(product.get("price", 0)),
            quantity=1,
            image=product.get("image") or "",
            sku=product.get("sku") or product.get("model") or "",
            category=product.get("category"),
            max_quantity=to_max_quantity(product.get("maxQuantity", product.get("max_quantity"))),
        )

    @classmethod
    def from_dict(cls, data: dict):
        try:
            return cls(
                id=str(data["id"]),
                name=str(data.get("name") or ""),
                price=to_decimal(data.get("price", 0)),
                quantity=int(data.get("quantity", 1)),
                image=data.get("image") or "",
                sku=data.get("sku") or "",
                category=data.get("category"),
                max_quantity=to_max_quantity(data.get("maxQuantity")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidCartData(f"Invalid cart item: {data!r}") from e

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "image": self.image,
            "sku": self.sku,
            "category": self.category,
            "maxQuantity": self.max_quantity,
        }


@dataclass
class CartChange:
    """What a cart mutation did.

    ``capped`` is set when the requested quantity was limited by the line's
    maximum; it is a warning, not a failure.
    """

    changed: bool
    item: CartItem | None = None
    capped: bool = False


@dataclass
class Cart:
    """The shopping cart of one device."""

    created_at: datetime
    last_updated: datetime
    expires_at: datetime
    device_id: str = ""
    items: list = field(default_factory=list)
    version: int = CART_VERSION

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, item_id) -> CartItem | None:
        item_id = str(item_id)
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def add(self, product: CartItem) -> CartChange:
        """Add one unit of a product, up to the line's maximum quantity.

        An existing line keeps the maximum it was created with.
        """
        existing = self.find(product.id)
        if existing is None:
            item = CartItem(
                id=product.id,
                name=product.name,
                price=product.price,
                quantity=1,
                image=product.image,
                sku=product.sku,
                category=product.category,
                max_quantity=product.max_quantity or DEFAULT_MAX_QUANTITY,
            )
            self.items.append(item)
            return CartChange(changed=True, item=item)

        new_quantity = min(existing.quantity + 1, existing.max_quantity)
        if new_quantity <= existing.quantity:
            return CartChange(changed=False, item=existing, capped=True)

        existing.quantity = new_quantity
        return CartChange(changed=True, item=existing)

    def update_quantity(self, item_id, quantity: int) -> CartChange:
        """Set a line's quantity, clamped to ``[0, max_quantity]``; 0 removes it."""
        item = self.find(item_id)
        if item is None:
            return CartChange(changed=False)

        if quantity <= 0:
            self.items.remove(item)
            return CartChange(changed=True, item=item)

        max_quantity = item.max_quantity or DEFAULT_MAX_QUANTITY
        new_quantity = min(quantity, max_quantity)
        changed = new_quantity != item.quantity
        item.quantity = new_quantity
        return CartChange(changed=changed, item=item, capped=new_quantity < quantity)

    def remove(self, item_id) -> CartChange:
        item = self.find(item_id)
        if item is None:
            return CartChange(changed=False)
        self.items.remove(item)
        return CartChange(changed=True, item=item)

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "totalItems": self.total_items,
            "totalPrice": self.total_price,
            "createdAt": format_timestamp(self.created_at),
            "lastUpdated": format_timestamp(self.last_updated),
            "expiresAt": format_timestamp(self.expires_at),
            "deviceId": self.device_id,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict):
        """Parse a stored record; stored totals are ignored and recomputed."""
        if not isinstance(data, dict):
            raise InvalidCartData("Cart record must be an object")
        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise InvalidCartData("Cart items must be a list")
        try:
            version = int(data.get("version") or CART_VERSION)
        except (TypeError, ValueError) as e:
            raise InvalidCartData(f"Invalid cart version: {data.get('version')!r}") from e
        try:
            return cls(
                created_at=parse_timestamp(data["createdAt"]),
                last_updated=parse_timestamp(data.get("lastUpdated") or data["createdAt"]),
                expires_at=parse_timestamp(data["expiresAt"]),
                device_id=data.get("deviceId") or "",
                items=[CartItem.from_dict(item) for item in raw_items],
                version=version,
            )
        except KeyError as e:
            raise InvalidCartData(f"Cart record is missing {e}") from e
