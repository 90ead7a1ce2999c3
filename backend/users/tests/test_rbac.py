"""
Role-Based Access Control Tests

Cashiers place orders and manage tables, kitchen and bar advance orders,
admins do everything including catalog and floor plan changes.
"""
import pytest


@pytest.mark.django_db
class TestOrderPermissions:

    def test_kitchen_cannot_create_order(self, kitchen_client_tenant_a, pizza_tenant_a):
        response = kitchen_client_tenant_a.post('/api/orders/', {
            'table_number': 5,
            'items': [{'product_id': pizza_tenant_a.id, 'quantity': 1}],
        }, format='json')

        assert response.status_code == 403

    def test_cashier_can_create_order(self, cashier_client_tenant_a, pizza_tenant_a):
        response = cashier_client_tenant_a.post('/api/orders/', {
            'table_number': 5,
            'items': [{'product_id': pizza_tenant_a.id, 'quantity': 1}],
        }, format='json')

        assert response.status_code == 201

    def test_cashier_cannot_change_order_status(self, cashier_client_tenant_a, kitchen_order_tenant_a):
        response = cashier_client_tenant_a.put(
            f'/api/orders/{kitchen_order_tenant_a.id}/status/', {'status': 'preparing'}, format='json'
        )

        assert response.status_code == 403

    def test_kitchen_can_change_order_status(self, kitchen_client_tenant_a, kitchen_order_tenant_a):
        response = kitchen_client_tenant_a.put(
            f'/api/orders/{kitchen_order_tenant_a.id}/status/', {'status': 'preparing'}, format='json'
        )

        assert response.status_code == 200

    def test_bar_can_change_order_status(self, client_for, bar_user_tenant_a, kitchen_order_tenant_a):
        response = client_for(bar_user_tenant_a).patch(
            f'/api/orders/{kitchen_order_tenant_a.id}/status/', {'status': 'preparing'}, format='json'
        )

        assert response.status_code == 200

    def test_every_role_can_read_orders(self, client_for, bar_user_tenant_a, kitchen_order_tenant_a):
        response = client_for(bar_user_tenant_a).get('/api/orders/')

        assert response.status_code == 200


@pytest.mark.django_db
class TestCatalogAndFloorPermissions:

    def test_cashier_cannot_create_product(self, cashier_client_tenant_a):
        response = cashier_client_tenant_a.post('/api/products/', {
            'name': 'Tiramisu', 'category': 'kitchen', 'price': '45.00',
        }, format='json')

        assert response.status_code == 403

    def test_kitchen_cannot_change_table_status(self, kitchen_client_tenant_a, table_5_tenant_a):
        response = kitchen_client_tenant_a.put('/api/tables/5/status/', {'status': 'reserved'}, format='json')

        assert response.status_code == 403

    def test_cashier_cannot_create_table(self, cashier_client_tenant_a):
        response = cashier_client_tenant_a.post('/api/tables/', {'number': 9}, format='json')

        assert response.status_code == 403
