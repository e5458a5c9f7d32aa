from __future__ import annotations

from typing import Any, Optional, Protocol


class UserAccountRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Any]:
        ...

    def username_exists(self, username: str) -> bool:
        ...

    def create_user(self, **data: Any) -> Any:
        ...


class TokenIssuerProtocol(Protocol):
    def __call__(self, user: Any) -> str:
        ...
