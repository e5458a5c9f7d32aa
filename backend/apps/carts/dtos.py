from dataclasses import dataclass
from typing import List


@dataclass
class CartEntryDTO:
    product_id: str
    quantity: int


@dataclass
class CartDTO:
    id: int
    user_id: int
    items: List[CartEntryDTO]
