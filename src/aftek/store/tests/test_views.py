"""Tests for the cart JSON endpoints and the cart middleware."""

import json
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.test import Client
from django.urls import reverse

from aftek.content.models import Product
from aftek.store.persistence import DEVICE_ID_COOKIE


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def client():
    """Return a Django test client."""
    return Client()


@pytest.fixture
def camera(db):
    return Product.objects.create(
        name="Dome Camera",
        price=Decimal("19.99"),
        model="DC-100",
        category="cameras",
        max_quantity=3,
        translations={"ja": {"name": "ドームカメラ"}},
    )


def post_json(client, name, data=None):
    return client.post(
        reverse(f"store:{name}"),
        data=json.dumps(data or {}),
        content_type="application/json",
    )


@pytest.mark.django_db
class TestCartView:
    def test_empty_cart(self, client):
        response = client.get(reverse("store:cart"))

        assert response.status_code == 200
        data = response.json()
        assert data["cart"]["items"] == []
        assert data["cart"]["totalItems"] == 0
        assert data["cart"]["isExpired"] is False

    def test_device_cookie_is_set_once(self, client):
        first = client.get(reverse("store:cart"))
        device_id = first.cookies[DEVICE_ID_COOKIE].value
        assert device_id.startswith("device_")

        second = client.get(reverse("store:cart"))

        assert DEVICE_ID_COOKIE not in second.cookies
        assert client.cookies[DEVICE_ID_COOKIE].value == device_id


@pytest.mark.django_db
class TestAddToCart:
    def test_add_by_product_id(self, client, camera):
        response = post_json(client, "add", {"productId": str(camera.pk)})

        assert response.status_code == 200
        data = response.json()
        assert data["cart"]["totalItems"] == 1
        assert data["cart"]["items"][0]["sku"] == "DC-100"
        assert data["recentlyAdded"] == [str(camera.pk)]
        assert {"level": "success", "message": "Dome Camera added to cart"} in data["notifications"]

    def test_cart_survives_across_requests(self, client, camera):
        post_json(client, "add", {"productId": str(camera.pk)})
        post_json(client, "add", {"productId": str(camera.pk)})

        data = client.get(reverse("store:cart")).json()

        assert data["cart"]["totalItems"] == 2
        assert data["cart"]["totalPrice"] == "39.98"

    def test_durable_cart_survives_a_new_session(self, client, camera):
        post_json(client, "add", {"productId": str(camera.pk)})
        device_id = client.cookies[DEVICE_ID_COOKIE].value

        other = Client()
        other.cookies[DEVICE_ID_COOKIE] = device_id
        data = other.get(reverse("store:cart")).json()

        assert data["cart"]["totalItems"] == 1

    def test_add_uses_session_language(self, client, camera):
        client.post(reverse("i18n:language"), data=json.dumps({"language": "ja"}), content_type="application/json")

        data = post_json(client, "add", {"productId": str(camera.pk)}).json()

        assert data["cart"]["items"][0]["name"] == "ドームカメラ"

    def test_add_product_payload(self, client):
        response = post_json(client, "add", {"product": {"id": "x1", "name": "Cable", "price": "2.50"}})

        assert response.status_code == 200
        assert response.json()["cart"]["totalPrice"] == "2.50"

    def test_cap_is_reported(self, client, camera):
        for _ in range(3):
            post_json(client, "add", {"productId": str(camera.pk)})

        data = post_json(client, "add", {"productId": str(camera.pk)}).json()

        assert data["capped"] is True
        assert data["cart"]["totalItems"] == 3
        assert {"level": "warning", "message": "Maximum quantity (3) reached for Dome Camera"} in data["notifications"]

    def test_unknown_product_is_404(self, client):
        response = post_json(client, "add", {"productId": "6f1c1f0e-0000-4000-8000-000000000000"})

        assert response.status_code == 404

    def test_malformed_product_id_is_404(self, client):
        response = post_json(client, "add", {"productId": "not-a-uuid"})

        assert response.status_code == 404

    @pytest.mark.parametrize("body", [
        {},
        {"product": "camera"},
        {"product": {"name": "No id"}},
        {"product": {"id": "x", "name": "Cable", "price": 1, "maxQuantity": "abc"}},
        {"product": {"id": "x", "name": "Cable", "price": 1, "maxQuantity": -1}},
        {"product": {"id": "x", "name": "Cable", "price": "-2"}},
    ])
    def test_bad_input_is_400(self, client, body):
        assert post_json(client, "add", body).status_code == 400

    def test_invalid_json_is_400(self, client):
        response = client.post(reverse("store:add"), data="{", content_type="application/json")

        assert response.status_code == 400


@pytest.mark.django_db
class TestUpdateRemoveClear:
    def test_update_quantity(self, client, camera):
        post_json(client, "add", {"productId": str(camera.pk)})

        data = post_json(client, "update", {"id": str(camera.pk), "quantity": 2}).json()

        assert data["cart"]["totalItems"] == 2

    def test_update_requires_integer_quantity(self, client, camera):
        response = post_json(client, "update", {"id": str(camera.pk), "quantity": "many"})

        assert response.status_code == 400

    def test_remove(self, client, camera):
        post_json(client, "add", {"productId": str(camera.pk)})

        data = post_json(client, "remove", {"id": str(camera.pk)}).json()

        assert data["cart"]["items"] == []
        assert {"level": "info", "message": "Item removed from cart"} in data["notifications"]

    def test_clear(self, client, camera):
        post_json(client, "add", {"productId": str(camera.pk)})

        data = post_json(client, "clear").json()

        assert data["changed"] is True
        assert data["cart"]["totalItems"] == 0
        assert client.get(reverse("store:cart")).json()["cart"]["totalItems"] == 0


@pytest.mark.django_db
class TestPrivacyView:
    def test_opt_out_keeps_cart_in_session_only(self, client, camera):
        response = post_json(client, "privacy", {"dontSave": True})
        assert response.json() == {"dontSave": True}

        post_json(client, "add", {"productId": str(camera.pk)})
        device_id = client.cookies[DEVICE_ID_COOKIE].value

        other = Client()
        other.cookies[DEVICE_ID_COOKIE] = device_id
        assert other.get(reverse("store:cart")).json()["cart"]["totalItems"] == 0
        assert client.get(reverse("store:cart")).json()["cart"]["totalItems"] == 1
        assert client.get(reverse("store:privacy")).json() == {"dontSave": True}

    def test_requires_boolean(self, client):
        assert post_json(client, "privacy", {"dontSave": "yes"}).status_code == 400
