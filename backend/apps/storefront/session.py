from __future__ import annotations

from dataclasses import replace
from typing import Optional

from apps.common import get_logger
from .dtos import AuthSession, Number

logger = get_logger(__name__).bind(component="storefront", layer="session")


class SessionContext:
    """
    Holder of the shopper's login state, shared by every collaborator that
    needs it. Only ``start`` and ``clear`` change it.
    """

    def __init__(self, session: Optional[AuthSession] = None):
        self._session = session or AuthSession()

    @property
    def token(self) -> Optional[str]:
        return self._session.token

    @property
    def username(self) -> Optional[str]:
        return self._session.username

    @property
    def balance(self) -> Optional[Number]:
        return self._session.balance

    @property
    def is_authenticated(self) -> bool:
        return bool(self._session.token)

    def snapshot(self) -> AuthSession:
        return replace(self._session)

    def start(self, token: str, username: str, balance: Number) -> None:
        self._session = AuthSession(token=token, username=username, balance=balance)
        logger.info("Session started", username=username)

    def clear(self) -> None:
        # token, username and balance always go together
        username = self._session.username
        self._session = AuthSession()
        logger.info("Session cleared", username=username)
