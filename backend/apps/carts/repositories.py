from typing import Tuple

from apps.common.repository import GenericRepository
from .models import Cart, CartProduct
from .utils import ensure_user_cart


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def get_or_create_for_user(self, user_id: int) -> Cart:
        return ensure_user_cart(user_id)


class CartProductRepository(GenericRepository[CartProduct]):
    def __init__(self):
        super().__init__(CartProduct)

    def get_for_cart_product(self, cart_id: int, product_id: str):
        return self.model.objects.filter(
            cart_id=cart_id, product_id=product_id
        ).first()

    def save_quantity(self, cart: Cart, product, quantity: int) -> Tuple[CartProduct, bool]:
        """Insert or update a line; losing a concurrent insert falls back to an update."""
        return self.model.objects.update_or_create(
            cart=cart, product=product, defaults={"quantity": quantity}
        )
