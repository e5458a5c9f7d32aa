from dataclasses import dataclass
from typing import Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    cost: Number
    rating: int
    image_url: str


@dataclass(frozen=True)
class CartEntry:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class CartLineItem:
    """A cart entry joined with its catalog product; product fields are None when unmatched."""

    product_id: str
    quantity: int
    name: Optional[str] = None
    category: Optional[str] = None
    cost: Optional[Number] = None
    rating: Optional[int] = None
    image_url: Optional[str] = None

    @property
    def is_partial(self) -> bool:
        return self.name is None

    @property
    def subtotal(self) -> Number:
        return (self.cost or 0) * self.quantity


@dataclass
class AuthSession:
    token: Optional[str] = None
    username: Optional[str] = None
    balance: Optional[Number] = None


@dataclass(frozen=True)
class MutationOptions:
    prevent_duplicate: bool = False


@dataclass(frozen=True)
class Notification:
    message: str
    variant: str
