"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    name = "aftek.core"
    verbose_name = "Aftek Core"
    default_auto_field = "django.db.models.BigAutoField"
