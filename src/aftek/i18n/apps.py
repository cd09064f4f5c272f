from django.apps import AppConfig


class I18nConfig(AppConfig):
    name = "aftek.i18n"
    label = "aftek_i18n"
    verbose_name = "Translations"
    default_auto_field = "django.db.models.BigAutoField"
