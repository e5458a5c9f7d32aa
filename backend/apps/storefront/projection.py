from typing import Iterable, List, Optional

from apps.common import get_logger
from .dtos import CartEntry, CartLineItem, Number, Product

logger = get_logger(__name__).bind(component="storefront", layer="projection")


def generate_cart_items(
    cart: Optional[Iterable[CartEntry]], products: Optional[Iterable[Product]]
) -> List[CartLineItem]:
    """
    Join cart entries with catalog products, keeping the cart's order and length.

    An entry whose product is not in the catalog becomes a partial line item
    carrying only the entry's own fields.
    """
    if not cart:
        return []
    by_id = {product.id: product for product in products or ()}
    items = []
    for entry in cart:
        product = by_id.get(entry.product_id)
        if product is None:
            logger.warning(
                "Cart entry has no matching product", product_id=entry.product_id
            )
            items.append(
                CartLineItem(product_id=entry.product_id, quantity=entry.quantity)
            )
            continue
        items.append(
            CartLineItem(
                product_id=entry.product_id,
                quantity=entry.quantity,
                name=product.name,
                category=product.category,
                cost=product.cost,
                rating=product.rating,
                image_url=product.image_url,
            )
        )
    return items


def visible_items(items: Optional[Iterable[CartLineItem]]) -> List[CartLineItem]:
    # Zero quantity marks a removed line
    return [item for item in items or () if item.quantity > 0]


def total_value(items: Optional[Iterable[CartLineItem]] = None) -> Number:
    return sum((item.subtotal for item in items or ()), 0)


def total_quantity(items: Optional[Iterable[CartLineItem]] = None) -> int:
    return sum((item.quantity for item in items or ()), 0)
