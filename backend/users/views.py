import logging

from django.conf import settings
from django.utils.decorators import method_decorator
from django_ratelimit.decorators import ratelimit
from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from core_backend.base import BaseViewSet

from .auth_cookie_service import AuthCookieService
from .models import User
from .permissions import IsAdminRole, IsTenantStaff
from .serializers import (
    LoginSerializer,
    StaffCreateSerializer,
    StaffUserSerializer,
    UserSerializer,
)
from .services import UserService

logger = logging.getLogger(__name__)


def _tenant_payload(tenant):
    return {
        "id": str(tenant.id),
        "name": tenant.name,
        "slug": tenant.slug,
    }


@method_decorator(
    ratelimit(key="ip", rate="5/m", method="POST", block=True), name="post"
)
class LoginView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = UserService.authenticate_staff(
                tenant=getattr(request, "tenant", None),
                **serializer.validated_data,
            )
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        if not user:
            logger.info(f"Failed login for {serializer.validated_data['email']}")
            return Response(
                {"error": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED
            )

        tokens = UserService.generate_tokens_for_user(user)
        response = Response({
            "user": UserSerializer(user).data,
            "tenant": _tenant_payload(user.tenant),
        })
        AuthCookieService.set_auth_cookies(response, tokens["access"], tokens["refresh"])

        logger.info(f"User {user.email} logged in to tenant {user.tenant.slug}")
        return response


class CookieTokenRefreshView(TokenRefreshView):
    """
    Issues a new access/refresh pair from the refresh cookie.

    Claims are rebuilt from the current user row, so a role change or a
    deactivated account takes effect on the next refresh.
    """

    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        refresh_cookie = request.COOKIES.get(settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"])
        if not refresh_cookie:
            return Response(
                {"error": "Refresh token not found."},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        try:
            refresh = RefreshToken(refresh_cookie)
            user = User.all_objects.select_related("tenant").get(
                id=refresh[settings.SIMPLE_JWT.get("USER_ID_CLAIM", "user_id")],
                is_active=True,
                tenant__is_active=True,
            )
        except (TokenError, KeyError, User.DoesNotExist) as e:
            logger.info(f"Token refresh rejected: {e}")
            response = Response(
                {"error": "Refresh token is invalid or expired."},
                status=status.HTTP_401_UNAUTHORIZED,
            )
            AuthCookieService.clear_auth_cookies(response)
            return response

        tokens = UserService.generate_tokens_for_user(user)
        response = Response({"message": "Token refreshed successfully"})
        AuthCookieService.set_auth_cookies(response, tokens["access"], tokens["refresh"])
        return response


class LogoutView(APIView):
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        response = Response(
            {"detail": "Successfully logged out."}, status=status.HTTP_200_OK
        )
        AuthCookieService.clear_auth_cookies(response)
        return response


class CurrentUserView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = request.user
        return Response({
            "user": UserSerializer(user).data,
            "tenant": _tenant_payload(user.tenant),
        })


class UserViewSet(BaseViewSet):
    """
    Staff accounts of the current tenant, for the admin screen.

    Supports:
    - ?role=cashier|kitchen|bar|admin
    - ?is_active=true|false

    Passwords are generated by the server and returned once, on create and
    on reset-password.
    """

    queryset = User.objects.all()
    serializer_class = StaffUserSerializer
    filterset_fields = ["role", "is_active"]
    ordering = ["role", "-date_joined"]

    def get_permissions(self):
        return [IsTenantStaff(), IsAdminRole()]

    def create(self, request, *args, **kwargs):
        serializer = StaffCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user, password = UserService.create_staff(tenant=request.tenant, **serializer.validated_data)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        data = dict(self.get_serializer(user).data, password=password)
        return Response(data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        try:
            UserService.delete_staff(user, acting_user=request.user)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, "message": "User deleted"})

    @action(detail=True, methods=["post"], url_path="reset-password")
    def reset_password(self, request, pk=None):
        user = self.get_object()
        password = UserService.reset_password(user)
        data = dict(self.get_serializer(user).data, password=password)
        return Response(data)
