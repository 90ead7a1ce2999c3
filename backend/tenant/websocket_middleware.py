"""
WebSocket Tenant Middleware for Django Channels.

Resolves tenant from JWT cookie and adds to WebSocket scope.
This allows consumers to access the tenant just like HTTP views.

The thread-local tenant used by TenantManager is NOT set here: database
calls from a consumer run on arbitrary worker threads. Consumers read
scope["tenant"] and query tenant-owned models through all_objects filtered
by that tenant explicitly.
"""
import jwt
from channels.db import database_sync_to_async
from django.conf import settings
from .models import Tenant
import logging

logger = logging.getLogger(__name__)


def parse_cookie_header(scope):
    """Return the cookies of a websocket scope as a dict."""
    headers = dict(scope.get('headers', []))
    cookie_header = headers.get(b'cookie', b'').decode('utf-8')

    cookies = {}
    for cookie in cookie_header.split(';'):
        cookie = cookie.strip()
        if '=' in cookie:
            key, value = cookie.split('=', 1)
            cookies[key] = value
    return cookies


class TenantWebSocketMiddleware:
    """
    ASGI middleware to add tenant context to WebSocket connections.

    Extracts tenant from JWT cookie (same as HTTP middleware) and adds
    to WebSocket scope so consumers can access it via self.scope['tenant'].
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope['type'] != 'websocket':
            return await self.app(scope, receive, send)

        # Tests and upstream middleware may have already placed a tenant
        tenant = scope.get('tenant') or await self.get_tenant_from_jwt(scope)
        scope['tenant'] = tenant

        if tenant:
            logger.info(f"TenantWebSocketMiddleware: Set tenant {tenant.slug} for WebSocket connection")
        else:
            logger.warning("TenantWebSocketMiddleware: No tenant found for WebSocket connection")

        return await self.app(scope, receive, send)

    async def get_tenant_from_jwt(self, scope):
        """
        Extract tenant from JWT token in cookies.

        Signature verification happens in JWTAuthMiddleware; the consumer
        rejects connections whose user does not belong to this tenant.
        """
        access_token = parse_cookie_header(scope).get(settings.SIMPLE_JWT.get("AUTH_COOKIE"))
        if not access_token:
            return None

        try:
            payload = jwt.decode(
                access_token,
                options={'verify_signature': False, 'verify_exp': False}
            )

            tenant_id = payload.get('tenant_id')
            if not tenant_id:
                return None

            return await database_sync_to_async(Tenant.objects.get)(
                id=tenant_id,
                is_active=True
            )

        except Exception as e:
            # Invalid JWT format, tenant not found, or other decode errors
            logger.debug(f"TenantWebSocketMiddleware: Failed to extract tenant from JWT: {e}")
            return None
