from django.db.models import Q

from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def search(self, term: str):
        """Case-insensitive substring match on name or category."""
        return self.model.objects.filter(
            Q(name__icontains=term) | Q(category__icontains=term)
        )

    def upsert(self, product_id: str, **fields) -> Product:
        product, _created = self.model.objects.update_or_create(
            id=product_id, defaults=fields
        )
        return product
