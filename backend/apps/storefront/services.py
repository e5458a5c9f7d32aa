from __future__ import annotations

from typing import Iterable, List, Optional

from apps.common import get_logger
from .client import QKartApiClient
from .dtos import CartEntry, MutationOptions, Product
from .errors import (
    GENERIC_CONNECTIVITY_MESSAGE,
    ConnectivityError,
    DuplicateItemError,
    StorefrontError,
    ValidationError,
)
from .gate import SessionGate
from .notifications import Navigator, Notifier
from .session import SessionContext

logger = get_logger(__name__).bind(component="storefront", layer="service")

USERNAME_MIN_LENGTH = 6
PASSWORD_MIN_LENGTH = 6


class CatalogAccessor:
    def __init__(self, client: QKartApiClient):
        self.client = client
        self.logger = logger.bind(service="CatalogAccessor")

    async def list_products(self) -> List[Product]:
        products = await self.client.list_products()
        self.logger.debug("Fetched catalog", count=len(products))
        return products

    async def search(self, text: str) -> List[Product]:
        """Raises ``NotFoundError`` when nothing matches."""
        return await self.client.search_products(text)


def is_item_in_cart(cart: Optional[Iterable[CartEntry]], product_id: str) -> bool:
    return any(
        entry.product_id == product_id and entry.quantity > 0 for entry in cart or ()
    )


class CartMutationService:
    """
    Applies cart changes against the remote store. On success the returned
    list is the server's cart verbatim; on failure nothing local changes.
    """

    def __init__(self, client: QKartApiClient, gate: SessionGate):
        self.client = client
        self.gate = gate
        self.logger = logger.bind(service="CartMutationService")

    async def fetch_cart(self, session: SessionContext) -> List[CartEntry]:
        if not session.token:
            return []
        return await self.gate.guard(session, self.client.fetch_cart)

    async def apply_cart_change(
        self,
        session: SessionContext,
        current_cart: Optional[List[CartEntry]],
        product_id: str,
        new_quantity: int,
        options: Optional[MutationOptions] = None,
    ) -> List[CartEntry]:
        options = options or MutationOptions()
        self.gate.require_token(session)
        if options.prevent_duplicate and is_item_in_cart(current_cart, product_id):
            self.logger.info("Duplicate add rejected", product_id=product_id)
            raise DuplicateItemError()

        async def upsert(token: str) -> List[CartEntry]:
            return await self.client.upsert_cart_item(token, product_id, new_quantity)

        cart = await self.gate.guard(session, upsert)
        self.logger.debug(
            "Cart change applied",
            product_id=product_id,
            quantity=new_quantity,
            lines=len(cart),
        )
        return cart


class AuthFlow:
    """Register, login and logout as the shopper experiences them."""

    def __init__(
        self,
        client: QKartApiClient,
        session: SessionContext,
        notifier: Notifier,
        navigator: Navigator,
    ):
        self.client = client
        self.session = session
        self.notifier = notifier
        self.navigator = navigator
        self.logger = logger.bind(service="AuthFlow")

    @staticmethod
    def validate_registration(username: str, password: str, confirm_password: str) -> None:
        if not username:
            raise ValidationError("Username is a required field")
        if len(username) < USERNAME_MIN_LENGTH:
            raise ValidationError(
                f"Username must be at least {USERNAME_MIN_LENGTH} characters"
            )
        if not password:
            raise ValidationError("Password is a required field")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )
        if password != confirm_password:
            raise ValidationError("Passwords do not match")

    @staticmethod
    def validate_login(username: str, password: str) -> None:
        if not username:
            raise ValidationError("Username is a required field")
        if not password:
            raise ValidationError("Password is a required field")

    def _report(self, exc: StorefrontError) -> None:
        if isinstance(exc, ConnectivityError):
            self.notifier.notify(GENERIC_CONNECTIVITY_MESSAGE, "error")
        else:
            self.notifier.notify(exc.message, exc.variant)

    async def register(
        self, username: str, password: str, confirm_password: str
    ) -> bool:
        try:
            self.validate_registration(username, password, confirm_password)
            await self.client.register(username, password)
        except StorefrontError as exc:
            self.logger.info("Registration failed", username=username, reason=exc.message)
            self._report(exc)
            return False
        self.notifier.notify("Registered successfully", "success")
        self.navigator.navigate("/login")
        return True

    async def login(self, username: str, password: str) -> bool:
        try:
            self.validate_login(username, password)
            data = await self.client.login(username, password)
        except StorefrontError as exc:
            self.logger.info("Login failed", username=username, reason=exc.message)
            self._report(exc)
            return False
        self.session.start(data["token"], data["username"], data["balance"])
        self.notifier.notify("Logged In Successfully", "success")
        self.navigator.navigate("/")
        return True

    def logout(self) -> None:
        self.session.clear()
        self.navigator.navigate("/")
