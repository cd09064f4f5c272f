"""Shopping cart URL patterns."""

from django.urls import path

from . import views

app_name = "store"

urlpatterns = [
    path("", views.CartView.as_view(), name="cart"),
    path("add/", views.AddToCartView.as_view(), name="add"),
    path("update/", views.UpdateQuantityView.as_view(), name="update"),
    path("remove/", views.RemoveFromCartView.as_view(), name="remove"),
    path("clear/", views.ClearCartView.as_view(), name="clear"),
    path("privacy/", views.PrivacyView.as_view(), name="privacy"),
]
