"""JSON endpoints for the shopping cart.

GET  /cart/                               -> cart record
POST /cart/add/      {"productId": "..."} or {"product": {...}}
POST /cart/update/   {"id": "...", "quantity": 2}
POST /cart/remove/   {"id": "..."}
POST /cart/clear/
POST /cart/privacy/  {"dontSave": true}

Every response carries the cart and the notifications queued while
handling the request.
"""

import json
import logging

from django.contrib import messages
from django.http import JsonResponse
from django.views import View

from aftek.content.models import Product
from aftek.content.services import ContentRepository, ContentStoreError, product_to_cart_item
from aftek.i18n.catalog import get_request_language

from .cart import InvalidCartData
from .storage import StorageError

logger = logging.getLogger(__name__)


def _parse_body(request):
    if not request.body:
        return {}
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def cart_response(request, status=200, **extra):
    store = request.cart
    payload = {
        "cart": store.to_dict(),
        "recentlyAdded": store.notifications(),
        "notifications": [
            {"level": message.level_tag, "message": message.message}
            for message in messages.get_messages(request)
        ],
    }
    payload.update(extra)
    return JsonResponse(payload, status=status)


class CartView(View):
    """Return the current cart."""

    def get(self, request):
        return cart_response(request)


class CartActionView(View):
    """Base for POST cart mutations with a JSON body."""

    def post(self, request):
        try:
            data = _parse_body(request)
        except ValueError as e:
            return JsonResponse({"error": f"Invalid JSON: {e}"}, status=400)
        return self.handle(request, data)

    def handle(self, request, data):
        raise NotImplementedError


class AddToCartView(CartActionView):
    def handle(self, request, data):
        product = data.get("product")
        if product is None:
            product_id = data.get("productId")
            if not product_id:
                return JsonResponse({"error": "product or productId is required"}, status=400)
            try:
                obj = ContentRepository(Product).get(product_id)
            except ContentStoreError:
                return JsonResponse({"error": "Product lookup failed"}, status=503)
            if obj is None or not obj.is_active:
                return JsonResponse({"error": "Product not found"}, status=404)
            product = product_to_cart_item(obj, get_request_language(request))

        if not isinstance(product, dict):
            return JsonResponse({"error": "product must be an object"}, status=400)

        try:
            change = request.cart.add(product)
        except InvalidCartData as e:
            return JsonResponse({"error": str(e)}, status=400)

        return cart_response(request, changed=change.changed, capped=change.capped)


class UpdateQuantityView(CartActionView):
    def handle(self, request, data):
        item_id = data.get("id")
        if not item_id:
            return JsonResponse({"error": "id is required"}, status=400)
        try:
            quantity = int(data.get("quantity"))
        except (TypeError, ValueError):
            return JsonResponse({"error": "quantity must be an integer"}, status=400)

        change = request.cart.update_quantity(item_id, quantity)
        return cart_response(request, changed=change.changed, capped=change.capped)


class RemoveFromCartView(CartActionView):
    def handle(self, request, data):
        item_id = data.get("id")
        if not item_id:
            return JsonResponse({"error": "id is required"}, status=400)

        change = request.cart.remove(item_id)
        return cart_response(request, changed=change.changed)


class ClearCartView(CartActionView):
    def handle(self, request, data):
        cleared = request.cart.clear()
        return cart_response(request, changed=cleared)


class PrivacyView(View):
    """Read or set the "don't save my cart" preference."""

    def get(self, request):
        return JsonResponse({"dontSave": request.cart.persistence.get_privacy_preference()})

    def post(self, request):
        try:
            data = _parse_body(request)
        except ValueError as e:
            return JsonResponse({"error": f"Invalid JSON: {e}"}, status=400)

        dont_save = data.get("dontSave")
        if not isinstance(dont_save, bool):
            return JsonResponse({"error": "dontSave must be true or false"}, status=400)

        try:
            request.cart.persistence.set_privacy_preference(dont_save)
        except StorageError as e:
            logger.error("Failed to update cart privacy preference: %s", e)
            return JsonResponse({"error": "Unable to update preference"}, status=503)
        return JsonResponse({"dontSave": dont_save})
