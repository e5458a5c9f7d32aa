from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

from apps.api.exceptions import InvalidTokenError
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="authentication")


class CartTokenAuthentication(JWTAuthentication):
    """
    Bearer JWT authentication for the cart endpoints.

    A missing header still yields an unauthenticated request (401 via the
    permission check). A header carrying an expired, malformed or orphaned
    token is reported as ``INVALID_TOKEN`` with HTTP 400, which storefront
    clients treat as the signal to drop their session.
    """

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed) as exc:
            logger.warning(
                "Rejected bearer token",
                path=getattr(request, "path", None),
                detail=str(exc),
            )
            raise InvalidTokenError() from exc
