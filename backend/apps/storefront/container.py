from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx
from django.conf import settings

from .client import QKartApiClient
from .controller import StorefrontController
from .gate import SessionGate
from .notifications import MemoryNavigator, MemoryNotifier, Navigator, Notifier
from .services import AuthFlow, CartMutationService, CatalogAccessor
from .session import SessionContext


@dataclass
class Storefront:
    session: SessionContext
    client: QKartApiClient
    controller: StorefrontController
    auth: AuthFlow
    notifier: Notifier
    navigator: Navigator

    async def aclose(self) -> None:
        await self.client.aclose()


def build_api_client(
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> QKartApiClient:
    return QKartApiClient(
        base_url or settings.QKART_API_ENDPOINT,
        timeout=settings.QKART_HTTP_TIMEOUT,
        transport=transport,
    )


def build_storefront(
    *,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    notifier: Optional[Notifier] = None,
    navigator: Optional[Navigator] = None,
    session: Optional[SessionContext] = None,
    search_delay_ms: Optional[int] = None,
) -> Storefront:
    session = session or SessionContext()
    notifier = notifier or MemoryNotifier()
    navigator = navigator or MemoryNavigator()
    client = build_api_client(base_url=base_url, transport=transport)
    gate = SessionGate(navigator)
    controller = StorefrontController(
        catalog=CatalogAccessor(client),
        carts=CartMutationService(client, gate),
        session=session,
        notifier=notifier,
        search_delay_ms=(
            settings.QKART_SEARCH_DEBOUNCE_MS
            if search_delay_ms is None
            else search_delay_ms
        ),
    )
    auth = AuthFlow(client, session, notifier, navigator)
    return Storefront(
        session=session,
        client=client,
        controller=controller,
        auth=auth,
        notifier=notifier,
        navigator=navigator,
    )
