from typing import Optional

CART_CONNECTIVITY_MESSAGE = (
    "Could not fetch cart details. Check that the backend is running, "
    "reachable and returns valid JSON."
)
GENERIC_CONNECTIVITY_MESSAGE = (
    "Something went wrong. Check that the backend is running, "
    "reachable and returns valid JSON."
)


class StorefrontError(Exception):
    """
    Base class for failures surfaced to the shopper.

    ``message`` is shown verbatim in a notification of the given ``variant``
    (``warning`` for things the shopper can fix, ``error`` otherwise).
    """

    default_message = "Something went wrong"
    default_variant = "error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        variant: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_message
        self.variant = variant or self.default_variant
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(StorefrontError):
    default_message = "Validation failed"
    default_variant = "warning"


class AuthError(StorefrontError):
    pass


class UnauthenticatedError(AuthError):
    default_message = "Login to add an item to the Cart"
    default_variant = "warning"


class InvalidTokenError(AuthError):
    default_message = "Token Invalid, Please Login Again"


class DuplicateItemError(StorefrontError):
    default_message = (
        "Item already in cart. Use the cart sidebar to update quantity or remove item."
    )
    default_variant = "warning"


class NotFoundError(StorefrontError):
    default_message = "Not found"


class ConnectivityError(StorefrontError):
    default_message = CART_CONNECTIVITY_MESSAGE
