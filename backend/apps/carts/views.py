from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.authentication import CartTokenAuthentication
from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_cart_service
from .serializers import CartEntrySerializer, CartUpsertSerializer

logger = get_logger(__name__).bind(component="carts", layer="view")


@extend_schema(tags=["Cart"])
class CartView(APIView):
    authentication_classes = [CartTokenAuthentication]
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        operation_id="cart_get",
        summary="Get cart",
        description="Returns the caller's cart as a list of productId/qty lines.",
        responses={
            200: CartEntrySerializer(many=True),
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Invalid token"
            ),
            401: OpenApiResponse(
                response=ErrorResponseSerializer, description="Missing token"
            ),
        },
    )
    def get(self, request):
        entries = self.service.get_cart_entries(request.user.id)
        return Response(CartEntrySerializer(entries, many=True).data)

    @extend_schema(
        operation_id="cart_upsert",
        summary="Set product quantity",
        description=(
            "Sets the absolute quantity of one product in the caller's cart. "
            "A quantity of zero removes the line. Responds with the full cart."
        ),
        request=CartUpsertSerializer,
        responses={
            200: CartEntrySerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(
                response=ErrorResponseSerializer, description="Product doesn't exist"
            ),
        },
    )
    def post(self, request):
        payload = CartUpsertSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        product_id = payload.validated_data["productId"]
        quantity = payload.validated_data["qty"]
        self.log.debug(
            "Handling cart upsert",
            user_id=request.user.id,
            product_id=product_id,
            quantity=quantity,
        )
        entries, error = self.service.set_item_quantity(
            request.user.id, product_id, quantity
        )
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response(CartEntrySerializer(entries, many=True).data)
