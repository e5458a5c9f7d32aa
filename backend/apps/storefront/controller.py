from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from apps.common import get_logger
from .dtos import CartEntry, CartLineItem, MutationOptions, Number, Product
from .errors import (
    CART_CONNECTIVITY_MESSAGE,
    ConnectivityError,
    NotFoundError,
    StorefrontError,
)
from .notifications import Notifier
from .projection import generate_cart_items, total_quantity, total_value, visible_items
from .search import SearchDebouncer
from .services import CartMutationService, CatalogAccessor
from .session import SessionContext

logger = get_logger(__name__).bind(component="storefront", layer="controller")


@dataclass
class SearchOutcome:
    products: List[Product] = field(default_factory=list)
    found: bool = True


class StorefrontController:
    """
    Page-level state of the shop: catalog, search results and the cart mirror.

    Storefront errors stop here. They become notifications and the previous
    state is kept.
    """

    def __init__(
        self,
        catalog: CatalogAccessor,
        carts: CartMutationService,
        session: SessionContext,
        notifier: Notifier,
        *,
        search_delay_ms: int = 500,
    ):
        self.catalog = catalog
        self.carts = carts
        self.session = session
        self.notifier = notifier
        self.products: List[Product] = []
        self.filtered_products: List[Product] = []
        self.cart: List[CartEntry] = []
        self.loading = False
        self.products_found = True
        self.search_key = ""
        self.search = SearchDebouncer(
            self._perform_search, self._apply_search, delay_ms=search_delay_ms
        )

    @property
    def line_items(self) -> List[CartLineItem]:
        return visible_items(generate_cart_items(self.cart, self.products))

    @property
    def total_value(self) -> Number:
        return total_value(self.line_items)

    @property
    def total_quantity(self) -> int:
        return total_quantity(self.line_items)

    @property
    def is_empty(self) -> bool:
        return not self.line_items

    def _surface(self, exc: StorefrontError) -> None:
        message = (
            CART_CONNECTIVITY_MESSAGE
            if isinstance(exc, ConnectivityError)
            else exc.message
        )
        self.notifier.notify(message, exc.variant)

    async def load(self) -> None:
        self.loading = True
        try:
            self.products = await self.catalog.list_products()
        except StorefrontError as exc:
            logger.warning("Could not load products", reason=exc.message)
            self.products = []
        self.filtered_products = list(self.products)
        self.loading = False
        self.cart = await self.load_cart()

    async def load_cart(self) -> List[CartEntry]:
        try:
            return await self.carts.fetch_cart(self.session)
        except StorefrontError as exc:
            self._surface(exc)
            return []

    async def _change(
        self, product_id: str, quantity: int, options: MutationOptions
    ) -> bool:
        try:
            self.cart = await self.carts.apply_cart_change(
                self.session, self.cart, product_id, quantity, options
            )
        except StorefrontError as exc:
            self._surface(exc)
            return False
        return True

    async def add_to_cart(self, product_id: str) -> bool:
        return await self._change(
            product_id, 1, MutationOptions(prevent_duplicate=True)
        )

    async def change_quantity(self, product_id: str, quantity: int) -> bool:
        return await self._change(product_id, quantity, MutationOptions())

    def on_search_input(self, text: str) -> None:
        self.search_key = text
        self.loading = True
        self.search.submit(text)

    async def _perform_search(self, text: str) -> SearchOutcome:
        try:
            return SearchOutcome(products=await self.catalog.search(text))
        except NotFoundError:
            return SearchOutcome(found=False)
        except StorefrontError as exc:
            logger.warning("Check if Backend is Running Correctly", reason=exc.message)
            return SearchOutcome(found=False)

    def _apply_search(self, text: str, outcome: SearchOutcome) -> None:
        self.filtered_products = outcome.products
        self.products_found = outcome.found
        self.loading = False

