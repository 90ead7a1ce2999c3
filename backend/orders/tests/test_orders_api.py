"""
Orders API Integration Tests

End-to-end flows through /api/orders/ as the cashier, kitchen and bar
screens use them.
"""
import pytest

from notifications.services import ORDER_CREATED, ORDER_UPDATED, TABLE_UPDATED
from orders.models import Order
from tables.models import Table


@pytest.mark.django_db
class TestCreateOrderAPI:

    def test_create_order(self, cashier_client_tenant_a, cashier_user_tenant_a, pizza_tenant_a, table_5_tenant_a):
        response = cashier_client_tenant_a.post('/api/orders/', {
            'table_number': 5,
            'comment': 'well done',
            'items': [{'product_id': pizza_tenant_a.id, 'quantity': 2}],
        }, format='json')

        assert response.status_code == 201
        data = response.data
        assert data['status'] == 'pending'
        assert data['total_price'] == '300.00'
        assert data['comment'] == 'well done'
        assert data['created_by'] == cashier_user_tenant_a.id
        assert data['created_by_username'] == 'cashier@pizza.com'
        assert data['items'][0]['product_name'] == 'Margherita'
        assert data['items'][0]['price'] == '150.00'
        assert data['items'][0]['category'] == 'kitchen'

        table_5_tenant_a.refresh_from_db()
        assert table_5_tenant_a.status == Table.Status.OCCUPIED

    def test_create_order_broadcasts(self, cashier_client_tenant_a, pizza_tenant_a, table_5_tenant_a, broadcasts, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = cashier_client_tenant_a.post('/api/orders/', {
                'table_number': 5,
                'items': [{'product_id': pizza_tenant_a.id, 'quantity': 1}],
            }, format='json')

        assert response.status_code == 201
        assert [event for _, event, _ in broadcasts] == [ORDER_CREATED, TABLE_UPDATED]
        assert broadcasts[0][2]['total_price'] == '150.00'

    def test_empty_items_returns_400(self, cashier_client_tenant_a):
        response = cashier_client_tenant_a.post('/api/orders/', {
            'table_number': 5, 'items': [],
        }, format='json')

        assert response.status_code == 400
        assert Order.all_objects.count() == 0

    def test_missing_table_number_returns_400(self, cashier_client_tenant_a, pizza_tenant_a):
        response = cashier_client_tenant_a.post('/api/orders/', {
            'items': [{'product_id': pizza_tenant_a.id, 'quantity': 1}],
        }, format='json')

        assert response.status_code == 400

    def test_unknown_product_returns_400(self, cashier_client_tenant_a, pizza_tenant_a, table_5_tenant_a):
        response = cashier_client_tenant_a.post('/api/orders/', {
            'table_number': 5,
            'items': [
                {'product_id': pizza_tenant_a.id, 'quantity': 1},
                {'product_id': 999999, 'quantity': 1},
            ],
        }, format='json')

        assert response.status_code == 400
        assert 'error' in response.data
        assert Order.all_objects.count() == 0
        table_5_tenant_a.refresh_from_db()
        assert table_5_tenant_a.status == Table.Status.AVAILABLE


@pytest.mark.django_db
class TestReadOrdersAPI:

    def test_list_orders(self, kitchen_client_tenant_a, mixed_order_tenant_a, kitchen_order_tenant_a):
        response = kitchen_client_tenant_a.get('/api/orders/')

        assert response.status_code == 200
        assert [o['id'] for o in response.data] == [kitchen_order_tenant_a.id, mixed_order_tenant_a.id]

    def test_filter_by_status(self, kitchen_client_tenant_a, tenant_a, mixed_order_tenant_a, kitchen_order_tenant_a):
        from orders.services import OrderService
        OrderService.advance(kitchen_order_tenant_a.id, tenant_a, 'ready')

        response = kitchen_client_tenant_a.get('/api/orders/?status=ready')

        assert [o['id'] for o in response.data] == [kitchen_order_tenant_a.id]

    def test_bar_screen_sees_bar_items_only(self, client_for, bar_user_tenant_a, mixed_order_tenant_a):
        response = client_for(bar_user_tenant_a).get('/api/orders/?category=bar')

        assert response.status_code == 200
        assert [i['product_name'] for i in response.data[0]['items']] == ['Lager']

    def test_retrieve_order(self, kitchen_client_tenant_a, mixed_order_tenant_a):
        response = kitchen_client_tenant_a.get(f'/api/orders/{mixed_order_tenant_a.id}/')

        assert response.status_code == 200
        assert response.data['table_number'] == 5
        assert len(response.data['items']) == 2

    def test_retrieve_missing_order_returns_404(self, kitchen_client_tenant_a, tenant_a):
        response = kitchen_client_tenant_a.get('/api/orders/999999/')

        assert response.status_code == 404
        assert 'error' in response.data

    def test_requires_authentication(self, api_client, tenant_a):
        response = api_client.get('/api/orders/')

        assert response.status_code == 401


@pytest.mark.django_db
class TestOrderStatusAPI:

    def test_update_status(self, kitchen_client_tenant_a, kitchen_order_tenant_a, broadcasts, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = kitchen_client_tenant_a.put(
                f'/api/orders/{kitchen_order_tenant_a.id}/status/', {'status': 'preparing'}, format='json'
            )

        assert response.status_code == 200
        assert response.data == {'success': True, 'message': 'Order status updated'}
        assert broadcasts[0][1] == ORDER_UPDATED
        assert broadcasts[0][2] == {'id': kitchen_order_tenant_a.id, 'status': 'preparing'}

    def test_served_frees_table(self, kitchen_client_tenant_a, kitchen_order_tenant_a, table_5_tenant_a):
        response = kitchen_client_tenant_a.put(
            f'/api/orders/{kitchen_order_tenant_a.id}/status/', {'status': 'served'}, format='json'
        )

        assert response.status_code == 200
        table_5_tenant_a.refresh_from_db()
        assert table_5_tenant_a.status == Table.Status.AVAILABLE

    def test_invalid_status_returns_400(self, kitchen_client_tenant_a, kitchen_order_tenant_a):
        response = kitchen_client_tenant_a.put(
            f'/api/orders/{kitchen_order_tenant_a.id}/status/', {'status': 'eaten'}, format='json'
        )

        assert response.status_code == 400
        assert response.data == {'error': 'Invalid status'}

    def test_missing_order_returns_404(self, kitchen_client_tenant_a, tenant_a):
        response = kitchen_client_tenant_a.put('/api/orders/999999/status/', {'status': 'ready'}, format='json')

        assert response.status_code == 404

    def test_strict_mode_rejection_returns_400(self, strict_transitions, kitchen_client_tenant_a, kitchen_order_tenant_a):
        response = kitchen_client_tenant_a.put(
            f'/api/orders/{kitchen_order_tenant_a.id}/status/', {'status': 'served'}, format='json'
        )

        assert response.status_code == 400
        assert 'Cannot transition' in response.data['error']
