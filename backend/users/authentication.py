from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken

User = get_user_model()


class CookieJWTAuthentication(JWTAuthentication):
    """
    Reads the access token from the auth cookie, falling back to the
    standard Authorization header for scripts and tests.
    """

    def authenticate(self, request):
        access_token = request.COOKIES.get(settings.SIMPLE_JWT["AUTH_COOKIE"])
        if not access_token:
            return super().authenticate(request)

        validated_token = self.get_validated_token(access_token)
        return self.get_user(validated_token), validated_token

    def get_user(self, validated_token):
        """
        Load the user with all_objects to bypass tenant filtering.

        JWT authentication runs before the tenant context is trusted. The
        user_id claim maps to exactly one user row, and that row's tenant is
        checked against the tenant resolved by the middleware.
        """
        try:
            user_id = validated_token[settings.SIMPLE_JWT.get('USER_ID_CLAIM', 'user_id')]
        except KeyError:
            raise InvalidToken('Token contained no recognizable user identification')

        try:
            user = User.all_objects.select_related('tenant').get(
                **{settings.SIMPLE_JWT.get('USER_ID_FIELD', 'id'): user_id}
            )
        except User.DoesNotExist:
            raise AuthenticationFailed('User not found', code='user_not_found')

        if not user.is_active:
            raise AuthenticationFailed('User is inactive', code='user_inactive')

        token_tenant = validated_token.get('tenant_id')
        if token_tenant and str(user.tenant_id) != str(token_tenant):
            raise AuthenticationFailed('Token tenant does not match user', code='tenant_mismatch')

        return user
