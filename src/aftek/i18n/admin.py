from django.contrib import admin

from .models import WebsiteText


@admin.register(WebsiteText)
class WebsiteTextAdmin(admin.ModelAdmin):
    list_display = ["key", "language", "section", "value", "updated_at"]
    list_filter = ["language", "section"]
    search_fields = ["key", "value"]
    ordering = ["section", "key", "language"]
