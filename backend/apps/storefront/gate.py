from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from apps.common import get_logger
from .errors import InvalidTokenError, UnauthenticatedError
from .notifications import Navigator
from .session import SessionContext

logger = get_logger(__name__).bind(component="storefront", layer="gate")

T = TypeVar("T")

LOGIN_PATH = "/login"


class SessionGate:
    """
    Admits cart calls only with a token, and tears the session down when the
    API reports that token as invalid. Tokens are never checked proactively.
    """

    def __init__(self, navigator: Navigator):
        self.navigator = navigator

    def require_token(self, session: SessionContext) -> str:
        if not session.token:
            raise UnauthenticatedError()
        return session.token

    def revoke(self, session: SessionContext) -> None:
        logger.warning("Invalid token reported; ending session", username=session.username)
        session.clear()
        self.navigator.navigate(LOGIN_PATH)

    async def guard(
        self, session: SessionContext, call: Callable[[str], Awaitable[T]]
    ) -> T:
        token = self.require_token(session)
        try:
            return await call(token)
        except InvalidTokenError:
            self.revoke(session)
            raise
