import logging

import jwt
from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import JsonResponse
from jwt.exceptions import InvalidTokenError

from .managers import set_current_tenant
from .models import Tenant

logger = logging.getLogger(__name__)


class TenantNotFoundError(Exception):
    """Raised when tenant cannot be resolved from request."""
    pass


def get_access_token_from_request(request):
    """
    Return the raw access token from the auth cookie or a Bearer header.

    The POS screens send the cookie; scripts and tests may send the header.
    """
    access_token = request.COOKIES.get(settings.SIMPLE_JWT.get("AUTH_COOKIE"))
    if access_token:
        return access_token

    header = request.META.get('HTTP_AUTHORIZATION', '')
    parts = header.split()
    if len(parts) == 2 and parts[0] in settings.SIMPLE_JWT.get('AUTH_HEADER_TYPES', ('Bearer',)):
        return parts[1]
    return None


class TenantMiddleware:
    """
    Resolves tenant from request and attaches to request.tenant.

    Resolution precedence (highest to lowest):
    1. JWT token with tenant_id claim - Staff screens (cookie or Bearer header)
    2. X-Tenant header - Tools calling the shared API with a slug
    3. Development fallback - DEFAULT_TENANT_SLUG on localhost/testserver
    4. No tenant - request.tenant is None and tenant-scoped views deny access

    An unknown tenant named by a token or header fails with 400.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        # Admin operates without tenant context
        if request.path.startswith('/admin/'):
            request.tenant = None
            set_current_tenant(None)
            return self.get_response(request)

        try:
            tenant = self.get_tenant_from_request(request)
            request.tenant = tenant

            # CRITICAL: Set thread-local context for TenantManager
            set_current_tenant(tenant)

            if tenant and not tenant.is_active:
                return JsonResponse({
                    'error': 'Tenant account is inactive',
                    'code': 'TENANT_INACTIVE'
                }, status=403)

            return self.get_response(request)

        except TenantNotFoundError as e:
            logger.warning(f"Tenant resolution failed for {request.path}: {e}")
            return JsonResponse({
                'error': str(e),
                'code': 'TENANT_NOT_FOUND'
            }, status=400)

        finally:
            # CRITICAL: Always clean up thread-local context
            set_current_tenant(None)

    def get_tenant_from_request(self, request):
        tenant_from_jwt = self.get_tenant_from_jwt(request)
        if tenant_from_jwt:
            return tenant_from_jwt

        tenant_header = request.META.get('HTTP_X_TENANT')
        if tenant_header:
            try:
                return Tenant.objects.get(slug=tenant_header)
            except Tenant.DoesNotExist:
                raise TenantNotFoundError(
                    f"Tenant '{tenant_header}' not found. Check X-Tenant header value."
                )

        host = request.get_host().split(':')[0]
        tenant_slug = self.get_fallback_tenant_slug(host)
        if tenant_slug:
            try:
                return Tenant.objects.get(slug=tenant_slug)
            except Tenant.DoesNotExist:
                raise TenantNotFoundError(
                    f"Fallback tenant '{tenant_slug}' not found."
                )

        return None

    def get_tenant_from_jwt(self, request):
        """
        Extract tenant from JWT token claims.

        This is a lightweight decode for tenant extraction only.
        Full JWT validation happens later in DRF authentication.
        """
        access_token = get_access_token_from_request(request)
        if not access_token:
            return None

        try:
            payload = jwt.decode(
                access_token,
                options={'verify_signature': False, 'verify_exp': False}
            )
        except InvalidTokenError:
            # Let DRF authentication reject the token
            return None

        tenant_id = payload.get('tenant_id')
        if not tenant_id:
            raise TenantNotFoundError(
                "JWT missing tenant_id claim. Token format is invalid."
            )

        try:
            return Tenant.objects.get(id=tenant_id)
        except (Tenant.DoesNotExist, ValueError, ValidationError):
            raise TenantNotFoundError(
                f"JWT tenant_id '{tenant_id}' not found. Token may be stale."
            )

    def get_fallback_tenant_slug(self, host):
        """Development hosts only; production fails closed."""
        if host in ['localhost', '127.0.0.1', 'testserver'] or host.startswith('192.168'):
            return getattr(settings, 'DEFAULT_TENANT_SLUG', None)
        return None
