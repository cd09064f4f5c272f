"""Translation rows stored in the content database."""

from django.db import models

from .locales import Language


def section_for_key(key: str) -> str:
    """The section of a dotted key is its first segment."""
    return key.split(".")[0]


class WebsiteText(models.Model):
    """One translated website string for one language.

    Rows override the bundled locale files at lookup time, which lets
    editors change copy from the admin without a deploy.
    """

    key = models.CharField(max_length=255)
    section = models.CharField(max_length=100, blank=True, db_index=True)
    language = models.CharField(max_length=10, choices=Language.choices, db_index=True)
    value = models.TextField(blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["section", "key", "language"]
        constraints = [
            models.UniqueConstraint(fields=["key", "language"], name="unique_website_text_key_language"),
        ]
        verbose_name = "website text"
        verbose_name_plural = "website texts"

    def __str__(self):
        return f"{self.language}:{self.key}"

    def save(self, *args, **kwargs):
        if not self.section:
            self.section = section_for_key(self.key)
        super().save(*args, **kwargs)
