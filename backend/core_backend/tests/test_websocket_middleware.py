"""
WebSocket Middleware Tests

JWTAuthMiddleware and TenantWebSocketMiddleware fill scope['user'] and
scope['tenant'] from the access token cookie.
"""
from datetime import timedelta

import pytest
from channels.db import database_sync_to_async
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.tokens import AccessToken

from core_backend.jwt_websocket_middleware import JWTAuthMiddleware
from tenant.managers import get_current_tenant
from tenant.websocket_middleware import TenantWebSocketMiddleware, parse_cookie_header
from users.models import User
from users.services import UserService


class ScopeRecorder:
    """Inner ASGI app that keeps the scope it was called with."""

    def __init__(self):
        self.scope = None

    async def __call__(self, scope, receive, send):
        self.scope = scope


def websocket_scope(cookie=''):
    return {'type': 'websocket', 'path': '/ws/pos/', 'headers': [(b'cookie', cookie.encode())]}


@pytest.fixture
def cashier_cookie(cashier_user_tenant_a):
    tokens = UserService.generate_tokens_for_user(cashier_user_tenant_a)
    return f"access_token={tokens['access']}"


@pytest.fixture
def expired_cookie(cashier_user_tenant_a):
    token = AccessToken.for_user(cashier_user_tenant_a)
    token.set_exp(lifetime=-timedelta(minutes=1))
    return f"access_token={token}"


@pytest.fixture
def closed_tenant_cookie(inactive_tenant):
    user = User.objects.create_user(email='late@closed.com', password='password123', tenant=inactive_tenant)
    tokens = UserService.generate_tokens_for_user(user)
    return f"access_token={tokens['access']}"


def test_parse_cookie_header():
    scope = websocket_scope('access_token=abc.def; theme=dark;broken')

    assert parse_cookie_header(scope) == {'access_token': 'abc.def', 'theme': 'dark'}


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
class TestJWTAuthMiddleware:

    async def test_valid_cookie_sets_user(self, cashier_user_tenant_a, cashier_cookie):
        inner = ScopeRecorder()

        await JWTAuthMiddleware(inner)(websocket_scope(cashier_cookie), None, None)

        assert inner.scope['user'].id == cashier_user_tenant_a.id

    async def test_expired_cookie_is_anonymous(self, expired_cookie):
        inner = ScopeRecorder()

        await JWTAuthMiddleware(inner)(websocket_scope(expired_cookie), None, None)

        assert isinstance(inner.scope['user'], AnonymousUser)

    async def test_missing_cookie_is_anonymous(self):
        inner = ScopeRecorder()

        await JWTAuthMiddleware(inner)(websocket_scope(), None, None)

        assert isinstance(inner.scope['user'], AnonymousUser)


@pytest.mark.django_db(transaction=True)
@pytest.mark.asyncio
class TestTenantWebSocketMiddleware:

    async def test_tenant_from_cookie(self, cashier_cookie, tenant_a):
        inner = ScopeRecorder()

        await TenantWebSocketMiddleware(inner)(websocket_scope(cashier_cookie), None, None)

        assert inner.scope['tenant'].id == tenant_a.id

    async def test_inactive_tenant_is_ignored(self, closed_tenant_cookie):
        inner = ScopeRecorder()

        await TenantWebSocketMiddleware(inner)(websocket_scope(closed_tenant_cookie), None, None)

        assert inner.scope['tenant'] is None

    async def test_thread_local_tenant_is_left_unset(self, cashier_cookie, tenant_a):
        seen = {}

        async def inner(scope, receive, send):
            seen['scope'] = scope['tenant']
            seen['context'] = await database_sync_to_async(get_current_tenant)()

        await TenantWebSocketMiddleware(inner)(websocket_scope(cashier_cookie), None, None)

        assert seen['scope'].id == tenant_a.id
        assert seen['context'] is None
