from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from django.db import transaction

from apps.common import get_logger
from .dtos import CartEntryDTO
from .protocols import (
    CartMapperProtocol,
    CartProductRepositoryProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]


class CartService:
    """
    Server side of the cart contract. Every mutation answers with the full,
    authoritative list of lines so clients can replace their local copy.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_products: CartProductRepositoryProtocol,
        products: ProductRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_products = cart_products
        self.products = products
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    def get_cart_entries(self, user_id: int) -> List[CartEntryDTO]:
        cart = self.carts.get_or_create_for_user(user_id)
        dto = self.cart_mapper.to_dto(cart)
        self.logger.debug(
            "Fetched cart", user_id=user_id, cart_id=cart.id, lines=len(dto.items)
        )
        return dto.items

    def set_item_quantity(
        self, user_id: int, product_id: str, quantity: int
    ) -> Tuple[Optional[List[CartEntryDTO]], Optional[ServiceError]]:
        """
        Make ``quantity`` the absolute quantity of ``product_id`` in the user's
        cart. Zero removes the line; an unknown product leaves the cart intact.
        """
        if quantity < 0:
            return None, (
                "VALIDATION_ERROR",
                "Quantity cannot be negative",
                {"qty": quantity},
            )
        product = self.products.get(id=product_id)
        if not product:
            self.logger.info(
                "Cart change rejected for unknown product",
                user_id=user_id,
                product_id=product_id,
            )
            return None, ("NOT_FOUND", "Product doesn't exist", {"productId": product_id})
        with transaction.atomic():
            cart = self.carts.get_or_create_for_user(user_id)
            if quantity == 0:
                line = self.cart_products.get_for_cart_product(cart.id, product_id)
                if line is not None:
                    self.cart_products.delete(line)
                    self.logger.debug(
                        "Removed cart line", cart_id=cart.id, product_id=product_id
                    )
            else:
                _, created = self.cart_products.save_quantity(cart, product, quantity)
                self.logger.debug(
                    "Added cart line" if created else "Updated cart line",
                    cart_id=cart.id,
                    product_id=product_id,
                    quantity=quantity,
                )
            dto = self.cart_mapper.to_dto(cart)
        return dto.items, None
