from typing import Iterable, List

from .dtos import CartDTO, CartEntryDTO
from .models import Cart, CartProduct


class CartEntryMapper:
    @staticmethod
    def to_dto(cp: CartProduct) -> CartEntryDTO:
        return CartEntryDTO(product_id=cp.product_id, quantity=cp.quantity)

    @staticmethod
    def many_to_dto(items: Iterable[CartProduct]) -> List[CartEntryDTO]:
        return [CartEntryMapper.to_dto(i) for i in items]


class CartMapper:
    def __init__(self, entry_mapper: CartEntryMapper = None) -> None:
        self.entry_mapper = entry_mapper or CartEntryMapper()

    def to_dto(self, cart: Cart) -> CartDTO:
        items = self.entry_mapper.many_to_dto(cart.cart_products.all())
        return CartDTO(id=cart.id, user_id=cart.user_id, items=items)
