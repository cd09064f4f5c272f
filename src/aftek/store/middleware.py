"""Cart middleware.

Attaches a lazily built ``CartStore`` to ``request.cart``, identified by a
long-lived device cookie, and runs the autosave after the view returns.
"""

from django.conf import settings
from django.utils.functional import SimpleLazyObject

from .notifications import RequestNotifier
from .persistence import DEVICE_ID_COOKIE, CartPersistence, generate_device_id
from .storage import CacheStorage, SessionStorage
from .store import CartStore

DEVICE_ID_MAX_AGE = 365 * 24 * 60 * 60


def build_cart_store(request, device_id: str) -> CartStore:
    notifier = RequestNotifier(request)
    persistence = CartPersistence(
        durable=CacheStorage(
            device_id,
            alias=settings.CART_CACHE_ALIAS,
            quota_bytes=settings.CART_STORAGE_QUOTA_BYTES,
        ),
        session=SessionStorage(request.session),
        device_id=device_id,
        notifier=notifier,
    )
    return CartStore(persistence, notifier=notifier)


class CartMiddleware:
    """Give every request a cart store for its device.

    Must come after the session and message middleware.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        device_id = request.COOKIES.get(DEVICE_ID_COOKIE)
        new_device = not device_id
        if new_device:
            device_id = generate_device_id()
        request.device_id = device_id

        built = []

        def get_store():
            store = build_cart_store(request, device_id)
            built.append(store)
            return store

        request.cart = SimpleLazyObject(get_store)

        response = self.get_response(request)

        if built:
            built[0].flush_if_due()
        if new_device and built:
            response.set_cookie(
                DEVICE_ID_COOKIE,
                device_id,
                max_age=DEVICE_ID_MAX_AGE,
                samesite="Lax",
                secure=request.is_secure(),
                httponly=True,
            )
        return response
