from __future__ import annotations

from typing import Optional, Protocol, Tuple, TYPE_CHECKING

from .models import Cart, CartProduct

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.catalog.models import Product


class CartRepositoryProtocol(Protocol):
    def get_or_create_for_user(self, user_id: int) -> Cart:
        ...


class CartProductRepositoryProtocol(Protocol):
    def get_for_cart_product(self, cart_id: int, product_id: str) -> Optional[CartProduct]:
        ...

    def save_quantity(
        self, cart: Cart, product: "Product", quantity: int
    ) -> Tuple[CartProduct, bool]:
        ...

    def delete(self, item: CartProduct) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart) -> "CartDTO":
        ...
