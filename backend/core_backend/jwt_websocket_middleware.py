"""
JWT WebSocket Authentication Middleware for Django Channels.

Authenticates websocket connections from the access token cookie so POS
screens get the same user on the event socket as on the HTTP API.
"""
import logging

import jwt
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.conf import settings
from django.contrib.auth.models import AnonymousUser

from tenant.websocket_middleware import parse_cookie_header
from users.models import User

logger = logging.getLogger(__name__)


@database_sync_to_async
def get_active_user(user_id):
    # No tenant context yet, so bypass the tenant-aware manager
    return User.all_objects.select_related('tenant').get(id=user_id, is_active=True)


class JWTAuthMiddleware(BaseMiddleware):
    """
    Replaces channels.auth.AuthMiddlewareStack for JWT-based authentication.

    Puts the authenticated user (or AnonymousUser) in scope['user'].
    """

    async def __call__(self, scope, receive, send):
        if scope['type'] != 'websocket':
            return await super().__call__(scope, receive, send)

        # Tests may inject an authenticated user directly
        if not getattr(scope.get('user'), 'is_authenticated', False):
            scope['user'] = await self.get_user_from_jwt(scope)

        return await super().__call__(scope, receive, send)

    async def get_user_from_jwt(self, scope):
        jwt_config = settings.SIMPLE_JWT
        access_token = parse_cookie_header(scope).get(jwt_config.get('AUTH_COOKIE'))

        if not access_token:
            logger.debug("No JWT access token found in WebSocket cookies")
            return AnonymousUser()

        try:
            payload = jwt.decode(
                access_token,
                jwt_config.get('SIGNING_KEY') or settings.SECRET_KEY,
                algorithms=[jwt_config.get('ALGORITHM', 'HS256')],
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Expired JWT token in WebSocket connection")
            return AnonymousUser()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid JWT token in WebSocket connection: {e}")
            return AnonymousUser()

        user_id = payload.get(jwt_config.get('USER_ID_CLAIM', 'user_id'))
        if not user_id:
            logger.warning("JWT payload missing user_id")
            return AnonymousUser()

        try:
            user = await get_active_user(user_id)
        except User.DoesNotExist:
            logger.warning(f"User {user_id} from JWT not found")
            return AnonymousUser()

        logger.info(f"WebSocket authenticated: user={user.email}, tenant_id={user.tenant_id}")
        return user
