from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from apps.common import get_logger
from .dtos import CartEntry, Product
from .errors import (
    GENERIC_CONNECTIVITY_MESSAGE,
    ConnectivityError,
    InvalidTokenError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from .schemas import (
    CartEntrySchema,
    ErrorSchema,
    LoginSchema,
    ProductSchema,
    validate_payload,
)

logger = get_logger(__name__).bind(component="storefront", layer="client")


class QKartApiClient:
    """
    Async HTTP client for the QKart REST API.

    Every method returns validated dataclasses or raises a
    ``StorefrontError`` subclass. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        self.logger = logger.bind(base_url=self.base_url)

    async def __aenter__(self) -> "QKartApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        connectivity_message: Optional[str] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            self.logger.warning(
                "Request failed", method=method, path=path, error=str(exc)
            )
            raise ConnectivityError(connectivity_message) from exc
        self.logger.debug(
            "Received response",
            method=method,
            path=path,
            status=response.status_code,
        )
        return response

    def _body(self, response: httpx.Response, connectivity_message: Optional[str] = None):
        try:
            return response.json()
        except ValueError as exc:
            self.logger.warning(
                "Response body is not JSON",
                path=response.request.url.path,
                status=response.status_code,
            )
            raise ConnectivityError(connectivity_message) from exc

    def _error(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        serializer = ErrorSchema(data=payload)
        return serializer.validated_data if serializer.is_valid() else {}

    def _products(self, response: httpx.Response) -> List[Product]:
        rows = validate_payload(
            ProductSchema,
            self._body(response, GENERIC_CONNECTIVITY_MESSAGE),
            many=True,
            message=GENERIC_CONNECTIVITY_MESSAGE,
        )
        return [
            Product(
                id=row["_id"],
                name=row["name"],
                category=row["category"],
                cost=row["cost"],
                rating=row["rating"],
                image_url=row["image"],
            )
            for row in rows
        ]

    def _cart(self, response: httpx.Response) -> List[CartEntry]:
        rows = validate_payload(CartEntrySchema, self._body(response), many=True)
        return [CartEntry(product_id=row["productId"], quantity=row["qty"]) for row in rows]

    def _raise_for_cart(self, response: httpx.Response) -> None:
        error = self._error(response)
        if response.status_code == 401:
            raise UnauthenticatedError(error.get("message"), status_code=401)
        if response.status_code == 400:
            if error.get("code") == "VALIDATION_ERROR":
                raise ValidationError(
                    error.get("message"), variant="error", status_code=400
                )
            raise InvalidTokenError(status_code=400)
        if response.status_code == 404:
            raise NotFoundError(error.get("message"), status_code=404)
        raise ConnectivityError(status_code=response.status_code)

    async def list_products(self) -> List[Product]:
        response = await self._request(
            "GET", "products", connectivity_message=GENERIC_CONNECTIVITY_MESSAGE
        )
        if response.status_code != 200:
            raise ConnectivityError(
                GENERIC_CONNECTIVITY_MESSAGE, status_code=response.status_code
            )
        return self._products(response)

    async def search_products(self, text: str) -> List[Product]:
        response = await self._request(
            "GET",
            "products/search",
            params={"value": text},
            connectivity_message=GENERIC_CONNECTIVITY_MESSAGE,
        )
        if response.status_code == 404:
            raise NotFoundError(
                self._error(response).get("message") or "No products found",
                status_code=404,
            )
        if response.status_code != 200:
            raise ConnectivityError(
                GENERIC_CONNECTIVITY_MESSAGE, status_code=response.status_code
            )
        return self._products(response)

    async def register(self, username: str, password: str) -> None:
        response = await self._request(
            "POST",
            "auth/register",
            json={"username": username, "password": password},
            connectivity_message=GENERIC_CONNECTIVITY_MESSAGE,
        )
        if response.status_code == 201:
            return
        if response.status_code == 400:
            raise ValidationError(
                self._error(response).get("message"), variant="error", status_code=400
            )
        raise ConnectivityError(
            GENERIC_CONNECTIVITY_MESSAGE, status_code=response.status_code
        )

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        """Returns ``token``, ``username`` and ``balance`` on success."""
        response = await self._request(
            "POST",
            "auth/login",
            json={"username": username, "password": password},
            connectivity_message=GENERIC_CONNECTIVITY_MESSAGE,
        )
        if response.status_code == 400:
            raise ValidationError(
                self._error(response).get("message"), variant="error", status_code=400
            )
        if response.status_code != 201:
            raise ConnectivityError(
                GENERIC_CONNECTIVITY_MESSAGE, status_code=response.status_code
            )
        data = validate_payload(
            LoginSchema,
            self._body(response, GENERIC_CONNECTIVITY_MESSAGE),
            message=GENERIC_CONNECTIVITY_MESSAGE,
        )
        return {
            "token": data["token"],
            "username": data["username"],
            "balance": data["balance"],
        }

    async def fetch_cart(self, token: str) -> List[CartEntry]:
        response = await self._request("GET", "cart", token=token)
        if response.status_code != 200:
            self._raise_for_cart(response)
        return self._cart(response)

    async def upsert_cart_item(
        self, token: str, product_id: str, quantity: int
    ) -> List[CartEntry]:
        response = await self._request(
            "POST",
            "cart",
            token=token,
            json={"productId": str(product_id), "qty": quantity},
        )
        if response.status_code != 200:
            self._raise_for_cart(response)
        return self._cart(response)
