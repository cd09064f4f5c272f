"""Content models for the storefront and the admin content panel."""

import uuid

from django.db import models


class ContentStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    REVIEW = "review", "In review"
    PUBLISHED = "published", "Published"
    ARCHIVED = "archived", "Archived"


class ContentBase(models.Model):
    """Fields shared by every piece of site content."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=200, unique=True, blank=True)
    tags = models.JSONField(default=list, blank=True)
    featured = models.BooleanField(default=False)
    display_order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    # Per-language overrides: {"ja": {"name": "...", "description": "..."}}
    translations = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["display_order", "-created_at"]

    def slug_source(self) -> str:
        raise NotImplementedError

    def save(self, *args, **kwargs):
        from .services import ensure_slug

        ensure_slug(self)
        super().save(*args, **kwargs)


class Product(ContentBase):
    """A product that can be shown in the catalog and added to the cart."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    image = models.CharField(max_length=500, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    currency = models.CharField(max_length=3, default="TWD")
    model = models.CharField(max_length=100, blank=True, help_text="Manufacturer model number")
    sku = models.CharField(max_length=100, blank=True)
    category = models.CharField(max_length=100, blank=True)
    in_stock = models.BooleanField(default=True)
    features = models.JSONField(default=list, blank=True)
    specifications = models.JSONField(default=dict, blank=True)
    show_price = models.BooleanField(default=True)
    show_in_catalog = models.BooleanField(default=True)
    max_quantity = models.PositiveIntegerField(default=99)

    class Meta(ContentBase.Meta):
        verbose_name = "product"
        verbose_name_plural = "products"

    def __str__(self):
        return self.name

    def slug_source(self):
        return self.name


class Project(ContentBase):
    """A completed installation shown in the portfolio."""

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    client = models.CharField(max_length=200, blank=True)
    location = models.CharField(max_length=200, blank=True)
    category = models.CharField(max_length=100, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    technologies = models.JSONField(default=list, blank=True)
    image = models.CharField(max_length=500, blank=True)

    class Meta(ContentBase.Meta):
        verbose_name = "project"
        verbose_name_plural = "projects"

    def __str__(self):
        return self.title

    def slug_source(self):
        return self.title


class Article(ContentBase):
    """A news or knowledge-base article."""

    title = models.CharField(max_length=200)
    excerpt = models.TextField(blank=True)
    body = models.TextField(blank=True)
    author = models.CharField(max_length=200, blank=True)
    category = models.CharField(max_length=100, blank=True)
    read_time = models.PositiveIntegerField(default=0, help_text="Minutes")
    status = models.CharField(max_length=20, choices=ContentStatus.choices, default=ContentStatus.DRAFT)
    published_at = models.DateTimeField(null=True, blank=True)

    class Meta(ContentBase.Meta):
        verbose_name = "article"
        verbose_name_plural = "articles"

    def __str__(self):
        return self.title

    def slug_source(self):
        return self.title
