from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.contrib.auth.hashers import make_password
from rest_framework_simplejwt.tokens import AccessToken

from apps.carts.utils import ensure_user_cart
from apps.common import get_logger
from .protocols import TokenIssuerProtocol, UserAccountRepositoryProtocol

logger = get_logger(__name__).bind(component="auth", layer="service")

ServiceError = Tuple[str, str, Optional[Dict[str, Any]]]


def issue_access_token(user) -> str:
    return str(AccessToken.for_user(user))


class RegistrationService:
    def __init__(self, users: UserAccountRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="RegistrationService")

    def _build_payload(self, data: Dict[str, Any]) -> Dict[str, Any]:
        # Hashing happens here, before the repository ever sees the password
        return {
            "username": data["username"].strip(),
            "password": make_password(data["password"]),
        }

    def register(self, data: Dict[str, Any]) -> Optional[ServiceError]:
        """Create an account with an empty cart. Returns an error tuple on conflict."""
        username = data["username"].strip()
        self.logger.debug("Received registration request", username=username)
        if self.users.username_exists(username):
            self.logger.info(
                "Registration rejected: username already exists", username=username
            )
            return (
                "VALIDATION_ERROR",
                "Username is already taken",
                {"username": username},
            )
        user = self.users.create_user(**self._build_payload(data))
        ensure_user_cart(user.id)
        self.logger.info(
            "User registered successfully", user_id=user.id, username=user.username
        )
        return None


class LoginService:
    def __init__(
        self,
        users: UserAccountRepositoryProtocol,
        token_issuer: TokenIssuerProtocol = issue_access_token,
    ):
        self.users = users
        self.token_issuer = token_issuer
        self.logger = logger.bind(service="LoginService")

    def login(
        self, username: str, password: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ServiceError]]:
        username = username.strip()
        user = self.users.get(username=username)
        if user is None or not user.is_active:
            self.logger.info("Login rejected: unknown username", username=username)
            return None, ("VALIDATION_ERROR", "Username does not exist", None)
        if not user.check_password(password):
            self.logger.info("Login rejected: wrong password", username=username)
            return None, ("VALIDATION_ERROR", "Password is incorrect", None)
        token = self.token_issuer(user)
        self.logger.info("User logged in", user_id=user.id, username=user.username)
        return {
            "success": True,
            "token": token,
            "username": user.username,
            "balance": user.wallet_money,
        }, None
