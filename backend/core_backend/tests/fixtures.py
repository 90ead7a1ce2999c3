"""
Shared test fixtures for all backend tests.

Two restaurants with one user per role, a kitchen and a bar product, and
a table, so lifecycle and isolation tests start from the same floor.
"""
import pytest
from decimal import Decimal

from tenant.models import Tenant
from users.models import User
from products.models import Product
from tables.models import Table


# ============================================================================
# TENANT FIXTURES
# ============================================================================

@pytest.fixture
def tenant_a(db):
    """Create test tenant A (Pizza Place)"""
    return Tenant.objects.create(
        name='Pizza Place',
        slug='pizza-place',
        is_active=True
    )


@pytest.fixture
def tenant_b(db):
    """Create test tenant B (Burger Joint)"""
    return Tenant.objects.create(
        name='Burger Joint',
        slug='burger-joint',
        is_active=True
    )


@pytest.fixture
def inactive_tenant(db):
    """Create inactive test tenant"""
    return Tenant.objects.create(
        name='Closed Restaurant',
        slug='closed-restaurant',
        is_active=False
    )


# ============================================================================
# USER FIXTURES
# ============================================================================

def _make_user(tenant, email, role):
    return User.objects.create_user(
        email=email,
        password='password123',
        tenant=tenant,
        role=role,
    )


@pytest.fixture
def admin_user_tenant_a(tenant_a):
    return _make_user(tenant_a, 'admin@pizza.com', User.Role.ADMIN)


@pytest.fixture
def cashier_user_tenant_a(tenant_a):
    return _make_user(tenant_a, 'cashier@pizza.com', User.Role.CASHIER)


@pytest.fixture
def kitchen_user_tenant_a(tenant_a):
    return _make_user(tenant_a, 'kitchen@pizza.com', User.Role.KITCHEN)


@pytest.fixture
def bar_user_tenant_a(tenant_a):
    return _make_user(tenant_a, 'bar@pizza.com', User.Role.BAR)


@pytest.fixture
def admin_user_tenant_b(tenant_b):
    return _make_user(tenant_b, 'admin@burger.com', User.Role.ADMIN)


@pytest.fixture
def cashier_user_tenant_b(tenant_b):
    return _make_user(tenant_b, 'cashier@burger.com', User.Role.CASHIER)


# ============================================================================
# PRODUCT FIXTURES
# ============================================================================

@pytest.fixture
def pizza_tenant_a(tenant_a):
    """Kitchen product priced 150"""
    return Product.all_objects.create(
        tenant=tenant_a,
        name='Margherita',
        category=Product.Category.KITCHEN,
        price=Decimal('150.00'),
    )


@pytest.fixture
def pasta_tenant_a(tenant_a):
    return Product.all_objects.create(
        tenant=tenant_a,
        name='Carbonara',
        category=Product.Category.KITCHEN,
        price=Decimal('120.50'),
    )


@pytest.fixture
def beer_tenant_a(tenant_a):
    """Bar product priced 60"""
    return Product.all_objects.create(
        tenant=tenant_a,
        name='Lager',
        category=Product.Category.BAR,
        price=Decimal('60.00'),
    )


@pytest.fixture
def product_tenant_b(tenant_b):
    return Product.all_objects.create(
        tenant=tenant_b,
        name='Cheeseburger',
        category=Product.Category.KITCHEN,
        price=Decimal('9.99'),
    )


# ============================================================================
# TABLE FIXTURES
# ============================================================================

@pytest.fixture
def table_5_tenant_a(tenant_a):
    return Table.all_objects.create(tenant=tenant_a, number=5, capacity=4)


@pytest.fixture
def table_5_tenant_b(tenant_b):
    return Table.all_objects.create(tenant=tenant_b, number=5, capacity=2)


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def mixed_order_tenant_a(tenant_a, cashier_user_tenant_a, pizza_tenant_a, beer_tenant_a, table_5_tenant_a):
    """Pending order at table 5 with one kitchen and one bar item."""
    from orders.services import OrderService
    return OrderService.create_order(
        tenant=tenant_a,
        table_number=5,
        comment='',
        items=[
            {'product_id': pizza_tenant_a.id, 'quantity': 1},
            {'product_id': beer_tenant_a.id, 'quantity': 1},
        ],
        created_by=cashier_user_tenant_a,
    )


@pytest.fixture
def kitchen_order_tenant_a(tenant_a, cashier_user_tenant_a, pizza_tenant_a, table_5_tenant_a):
    """Pending order at table 5 with kitchen items only."""
    from orders.services import OrderService
    return OrderService.create_order(
        tenant=tenant_a,
        table_number=5,
        comment='no basil',
        items=[{'product_id': pizza_tenant_a.id, 'quantity': 2}],
        created_by=cashier_user_tenant_a,
    )


@pytest.fixture
def order_tenant_b(tenant_b, cashier_user_tenant_b, product_tenant_b, table_5_tenant_b):
    from orders.services import OrderService
    return OrderService.create_order(
        tenant=tenant_b,
        table_number=5,
        comment='',
        items=[{'product_id': product_tenant_b.id, 'quantity': 1}],
        created_by=cashier_user_tenant_b,
    )


@pytest.fixture
def broadcasts(monkeypatch):
    """
    Record every EventBroadcaster.broadcast call as (tenant_id, event, data).

    on_commit callbacks do not run inside a test transaction; combine with
    django_capture_on_commit_callbacks(execute=True) to see events.
    """
    from notifications.services import EventBroadcaster

    sent = []

    def record(tenant_id, event_name, payload, room=None):
        sent.append((tenant_id, event_name, payload))

    monkeypatch.setattr(EventBroadcaster, "broadcast", staticmethod(record))
    return sent
