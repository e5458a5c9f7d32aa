from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, SuccessResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_login_service, build_registration_service
from .serializers import (
    LoginRequestSerializer,
    LoginResponseSerializer,
    RegisterRequestSerializer,
)

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_registration_service()
    log = logger.bind(view="RegisterView")

    @extend_schema(
        operation_id="auth_register",
        summary="Register user",
        request=RegisterRequestSerializer,
        responses={
            201: SuccessResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        error = self.service.register(serializer.validated_data)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        return Response({"success": True}, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Auth"])
class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_login_service()
    log = logger.bind(view="LoginView")

    @extend_schema(
        operation_id="auth_login",
        summary="Log in",
        description="Issues a bearer token together with the user's wallet balance.",
        request=LoginRequestSerializer,
        responses={
            201: LoginResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data, error = self.service.login(
            serializer.validated_data["username"],
            serializer.validated_data["password"],
        )
        if error:
            code, message, details = error
            return error_response(code, message, details)
        self.log.debug("Login succeeded", username=data["username"])
        return Response(
            LoginResponseSerializer(data).data, status=status.HTTP_201_CREATED
        )
