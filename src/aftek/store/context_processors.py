"""Context processors for the shopping cart."""


def cart_context(request):
    """Expose the request's lazy cart store to templates."""
    cart = getattr(request, "cart", None)
    if cart is None:
        return {}
    return {"cart": cart}
