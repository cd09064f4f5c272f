"""URL configuration for the Aftek website."""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from aftek.core.views import health_check, languages

urlpatterns = [
    # Health check
    path("health/", health_check, name="health_check"),

    # Supported languages
    path("languages/", languages, name="languages"),

    # Django admin (content panel)
    path("admin/", admin.site.urls),

    # Shopping cart
    path("cart/", include("aftek.store.urls", namespace="store")),

    # Translations
    path("i18n/", include("aftek.i18n.urls", namespace="i18n")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
