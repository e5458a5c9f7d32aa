from dataclasses import dataclass
from decimal import Decimal


@dataclass
class ProductDTO:
    id: str
    name: str
    category: str
    cost: Decimal
    rating: int
    image: str
