from __future__ import annotations

from apps.carts.models import Cart


def ensure_user_cart(user_id: int) -> Cart:
    """Guarantee that the given user owns a cart, creating an empty one on demand."""
    cart, _ = Cart.objects.get_or_create(user_id=user_id)
    return cart
