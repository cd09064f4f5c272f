"""Store app configuration."""

from django.apps import AppConfig


class StoreConfig(AppConfig):
    name = "aftek.store"
    verbose_name = "Store"
    default_auto_field = "django.db.models.BigAutoField"
