"""Translation URL patterns."""

from django.urls import path

from . import views

app_name = "i18n"

urlpatterns = [
    path("language/", views.LanguageView.as_view(), name="language"),
]
