"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from django.conf import settings
from django.core.cache import cache

from tenant.managers import set_current_tenant


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def in_memory_channel_layer(settings):
    """
    Route broadcasts through the in-memory channel layer, even when
    REDIS_URL is set in the environment.
    """
    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"}
    }
    from channels.layers import channel_layers
    channel_layers.backends.clear()
    yield
    channel_layers.backends.clear()


@pytest.fixture(autouse=True)
def reset_tenant_context():
    """
    Reset tenant context after each test.

    CRITICAL: This prevents tenant context from leaking between tests.
    If tenant context leaks, tests may pass when they should fail.
    """
    yield
    set_current_tenant(None)


@pytest.fixture(autouse=True)
def clear_cache_after_test():
    """
    Clear cache after each test so login rate-limit counters start fresh.
    """
    yield
    cache.clear()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

def _client_for(user):
    """APIClient carrying an access token cookie with tenant claims."""
    from rest_framework.test import APIClient
    from users.services import UserService

    client = APIClient()
    tokens = UserService.generate_tokens_for_user(user)
    client.cookies[settings.SIMPLE_JWT.get('AUTH_COOKIE', 'access_token')] = tokens["access"]
    return client


@pytest.fixture
def api_client():
    """
    Provide an unauthenticated DRF API client.

    Usage:
        def test_requires_login(api_client):
            response = api_client.get('/api/orders/')
            assert response.status_code == 401
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def client_for():
    """
    Factory for an authenticated client of any user.

    Usage:
        def test_kitchen_screen(client_for, kitchen_user_tenant_a):
            client = client_for(kitchen_user_tenant_a)
    """
    return _client_for


@pytest.fixture
def authenticated_client_tenant_a(admin_user_tenant_a):
    """
    Provide authenticated API client for tenant A's admin.

    Usage:
        def test_protected_endpoint(authenticated_client_tenant_a):
            response = authenticated_client_tenant_a.get('/api/orders/')
            assert response.status_code == 200
    """
    return _client_for(admin_user_tenant_a)


@pytest.fixture
def authenticated_client_tenant_b(admin_user_tenant_b):
    """
    Provide authenticated API client for tenant B's admin.

    Usage:
        def test_tenant_isolation(authenticated_client_tenant_b, pizza_tenant_a):
            response = authenticated_client_tenant_b.get(f'/api/products/{pizza_tenant_a.id}/')
            assert response.status_code == 404
    """
    return _client_for(admin_user_tenant_b)


@pytest.fixture
def cashier_client_tenant_a(cashier_user_tenant_a):
    return _client_for(cashier_user_tenant_a)


@pytest.fixture
def kitchen_client_tenant_a(kitchen_user_tenant_a):
    return _client_for(kitchen_user_tenant_a)


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================

@pytest.fixture
def strict_transitions(settings):
    """Enable linear status enforcement for the duration of a test."""
    settings.ORDER_STRICT_TRANSITIONS = True
    yield


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *  # noqa: E402,F401,F403
