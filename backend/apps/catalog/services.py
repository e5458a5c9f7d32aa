from __future__ import annotations

from typing import List, Optional

from apps.common import get_logger
from .dtos import ProductDTO
from .mappers import ProductMapper
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        self._cache_prefix = "products:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        return self.cache.get(self._cache_version_key) or self._default_version

    def bump_cache_version(self) -> int:
        """Invalidate every cached listing by moving to a new key version."""
        version = self._get_cache_version() + 1
        # Version key never expires
        self.cache.set(self._cache_version_key, version, timeout=None)
        self.logger.debug("Bumped product cache version", new_version=version)
        return version

    def _cache_key(self) -> str:
        return f"{self._cache_prefix}:v{self._get_cache_version()}"

    def list_products(self) -> List[ProductDTO]:
        self.logger.debug("Listing products", cache_enabled=not self.disable_cache)
        if self.disable_cache:
            return ProductMapper.many_to_dto(self.products.list())
        key = self._cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        data = ProductMapper.many_to_dto(self.products.list())
        self.cache.set(key, data)
        return data

    def search_products(self, term: Optional[str]) -> List[ProductDTO]:
        """Products whose name or category contains ``term``; blank lists all."""
        normalized = (term or "").strip()
        if not normalized:
            return self.list_products()
        results = ProductMapper.many_to_dto(self.products.search(normalized))
        self.logger.debug(
            "Searched products", term=normalized, result_count=len(results)
        )
        return results

