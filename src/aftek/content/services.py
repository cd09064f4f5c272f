"""Content store services.

``ContentRepository`` is the admin panel's table access: plain CRUD on a
content model, logging and wrapping database failures. Concurrent edits are
not coordinated; the last save wins.
"""

import logging
import re

from django.core.exceptions import ValidationError
from django.db import DatabaseError

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_IMAGE = "/placeholder.svg"


class ContentStoreError(Exception):
    """A content store read or write failed."""


def generate_slug(name: str) -> str:
    """Lowercase ASCII slug: letters, digits and single hyphens."""
    slug = (name or "").lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def ensure_slug(obj):
    """Give an unsaved or slugless object a unique slug."""
    if obj.slug:
        return obj.slug

    base = generate_slug(obj.slug_source()) or obj._meta.model_name
    slug = base
    suffix = 2
    others = type(obj).objects.exclude(pk=obj.pk)
    while others.filter(slug=slug).exists():
        slug = f"{base}-{suffix}"
        suffix += 1
    obj.slug = slug
    return slug


def localized(obj, field: str, language) -> str:
    """Read a field in the given language, falling back to the base field."""
    code = getattr(language, "value", language)
    overrides = (obj.translations or {}).get(code) or {}
    value = overrides.get(field)
    if value:
        return value
    return getattr(obj, field, "") or ""


def product_to_cart_item(product, language=None) -> dict:
    """Build the product payload the cart's ``add`` expects."""
    return {
        "id": str(product.pk),
        "name": localized(product, "name", language) if language else product.name,
        "price": product.price,
        "image": product.image or DEFAULT_PRODUCT_IMAGE,
        "sku": product.sku or product.model,
        "model": product.model,
        "category": product.category or None,
        "maxQuantity": product.max_quantity,
    }


def _feature_list(features) -> list:
    if isinstance(features, str):
        return [features] if features else []
    return list(features or [])


def filter_products(products, search=None, category=None, features=None, language=None) -> list:
    """Narrow a product queryset the way the catalog filter bar does.

    Search matches the name, the name in ``language`` or the description,
    ignoring case. Category ``"all"`` or empty matches everything. A product
    passes the feature filter if it has any of the listed features.
    """
    if category and category.lower() != "all":
        products = products.filter(category__iexact=category)

    code = getattr(language, "value", language)
    needle = (search or "").lower()
    wanted = set(_feature_list(features))

    matches = []
    for product in products:
        if needle:
            localized_name = ((product.translations or {}).get(code) or {}).get("name") or ""
            haystacks = (product.name or "", localized_name, product.description or "")
            if not any(needle in text.lower() for text in haystacks):
                continue
        if wanted and not wanted & set(_feature_list(product.features)):
            continue
        matches.append(product)
    return matches


def active_products():
    from .models import Product

    return Product.objects.filter(is_active=True)


def featured_products():
    return active_products().filter(featured=True)


def product_by_slug(slug: str):
    """Return the active product with this slug, or None."""
    return active_products().filter(slug=slug).first()


def products_by_category(category: str):
    return active_products().filter(category=category)


class ContentRepository:
    """CRUD access to one content model.

    Args:
        model: a content model class, e.g. ``Product``
    """

    def __init__(self, model):
        self.model = model

    @property
    def name(self) -> str:
        return self.model._meta.verbose_name_plural

    def select(self, **filters) -> list:
        try:
            return list(self.model.objects.filter(**filters))
        except DatabaseError as e:
            logger.error(f"Failed to read {self.name}: {e}")
            raise ContentStoreError(f"Failed to read {self.name}") from e

    def get(self, pk):
        """Return the object with this primary key, or None."""
        try:
            return self.model.objects.filter(pk=pk).first()
        except ValidationError:
            return None
        except DatabaseError as e:
            logger.error(f"Failed to read {self.name} {pk}: {e}")
            raise ContentStoreError(f"Failed to read {self.name} {pk}") from e

    def insert(self, **values):
        try:
            obj = self.model.objects.create(**values)
        except DatabaseError as e:
            logger.error(f"Failed to create {self.model._meta.verbose_name}: {e}")
            raise ContentStoreError(f"Failed to create {self.model._meta.verbose_name}") from e
        logger.info(f"Created {self.model._meta.verbose_name} {obj.pk}")
        return obj

    def update(self, pk, **values):
        """Apply field values to an existing object; returns None if it does not exist."""
        obj = self.get(pk)
        if obj is None:
            return None
        for field, value in values.items():
            setattr(obj, field, value)
        try:
            obj.save()
        except DatabaseError as e:
            logger.error(f"Failed to update {self.model._meta.verbose_name} {pk}: {e}")
            raise ContentStoreError(f"Failed to update {self.model._meta.verbose_name} {pk}") from e
        logger.info(f"Updated {self.model._meta.verbose_name} {pk}")
        return obj

    def delete(self, pk) -> bool:
        try:
            deleted, _ = self.model.objects.filter(pk=pk).delete()
        except DatabaseError as e:
            logger.error(f"Failed to delete {self.model._meta.verbose_name} {pk}: {e}")
            raise ContentStoreError(f"Failed to delete {self.model._meta.verbose_name} {pk}") from e
        if deleted:
            logger.info(f"Deleted {self.model._meta.verbose_name} {pk}")
        return bool(deleted)
