from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_product_service
from .serializers import ProductReadSerializer, ProductSearchQuerySerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Returns the full catalog. Cached results may be served.",
        responses={
            200: ProductReadSerializer(many=True),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        self.log.debug("Handling product list request")
        products = self.service.list_products()
        return Response(ProductReadSerializer(products, many=True).data)


@extend_schema(tags=["Catalog"])
class ProductSearchView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_product_service()
    log = logger.bind(view="ProductSearchView")

    @extend_schema(
        operation_id="products_search",
        summary="Search products",
        description="Case-insensitive match against product name or category.",
        parameters=[
            OpenApiParameter(
                name="value",
                description="Search text",
                required=False,
                type=str,
            )
        ],
        responses={
            200: ProductReadSerializer(many=True),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        query = ProductSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        term = query.validated_data["value"]
        products = self.service.search_products(term)
        if not products:
            self.log.info("Search returned no products", term=term)
            return error_response("NOT_FOUND", "No products found", {"value": term})
        return Response(ProductReadSerializer(products, many=True).data)
