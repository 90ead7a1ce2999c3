import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Prefetch

from notifications.services import (
    KITCHEN_READY,
    ORDER_CREATED,
    ORDER_UPDATED,
    EventBroadcaster,
)
from orders.exceptions import (
    InvalidOrderStatusError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    ProductNotFoundError,
)
from orders.models import Order, OrderItem
from orders.serializers import OrderSerializer
from products.models import Product
from tables.models import Table
from tables.services import TableService

logger = logging.getLogger(__name__)


class OrderService:
    """Order lifecycle: placing orders and moving them through kitchen and bar."""

    # Used only when ORDER_STRICT_TRANSITIONS is on; otherwise any known
    # status may follow any other so staff can correct mistakes freely.
    VALID_STATUS_TRANSITIONS = {
        Order.OrderStatus.PENDING: [
            Order.OrderStatus.PENDING,
            Order.OrderStatus.PREPARING,
            Order.OrderStatus.CANCELLED,
        ],
        Order.OrderStatus.PREPARING: [
            Order.OrderStatus.PREPARING,
            Order.OrderStatus.READY,
            Order.OrderStatus.CANCELLED,
        ],
        Order.OrderStatus.READY: [
            Order.OrderStatus.READY,
            Order.OrderStatus.PREPARING,  # Sent back to the kitchen
            Order.OrderStatus.SERVED,
            Order.OrderStatus.CANCELLED,
        ],
        Order.OrderStatus.SERVED: [Order.OrderStatus.SERVED],
        Order.OrderStatus.CANCELLED: [Order.OrderStatus.CANCELLED],
    }

    @staticmethod
    @transaction.atomic
    def create_order(tenant, table_number: int, comment, items: list, created_by=None) -> Order:
        """
        Place an order for a table.

        Args:
            tenant: Tenant placing the order
            table_number: Table the order is for
            comment: Optional free text for the kitchen/bar
            items: List of {"product_id": int, "quantity": int}
            created_by: User who placed the order

        Prices, names and categories are copied from the tenant's catalog.
        The order, its items and the table's occupied status are written in
        one transaction; order:created is sent after it commits.

        Raises:
            ValueError: If there are no items or a quantity is below 1
            ProductNotFoundError: If a product is not in the tenant's catalog
        """
        if not items:
            raise ValueError("An order must contain at least one item.")

        products = {
            product.id: product
            for product in Product.all_objects.filter(
                tenant=tenant, id__in={item["product_id"] for item in items}
            )
        }

        lines = []
        for item in items:
            product = products.get(item["product_id"])
            if product is None:
                raise ProductNotFoundError(f"Product {item['product_id']} not found")

            quantity = int(item["quantity"])
            if quantity < 1:
                raise ValueError(f"Quantity for product {product.id} must be at least 1.")
            lines.append((product, quantity))

        order = Order.all_objects.create(
            tenant=tenant,
            table_number=table_number,
            comment=comment or "",
            created_by=created_by,
            status=Order.OrderStatus.PENDING,
        )

        total_price = Decimal("0.00")
        order_items = []
        for product, quantity in lines:
            order_items.append(OrderItem(
                tenant=tenant,
                order=order,
                product=product,
                product_name=product.name,
                quantity=quantity,
                price=product.price,
                category=product.category,
            ))
            total_price += product.price * quantity

        OrderItem.all_objects.bulk_create(order_items)

        order.total_price = total_price
        order.save(update_fields=["total_price", "updated_at"])

        order = OrderService.get_order(order.id, tenant)
        EventBroadcaster.broadcast_on_commit(
            tenant.id, ORDER_CREATED, OrderSerializer(order).data
        )

        TableService.set_status(tenant, table_number, Table.Status.OCCUPIED, missing_ok=True)

        logger.info(
            f"Order {order.id} created for table {table_number} of tenant {tenant.slug}: "
            f"{len(order_items)} items, total {total_price}"
        )
        return order

    @staticmethod
    @transaction.atomic
    def advance(order_id, tenant, new_status: str) -> Order:
        """
        Move an order to a new status and apply its side effects.

        - served (and cancelled, per ORDER_RELEASE_TABLE_ON_CANCEL) frees the
          table when no other active order is seated at it
        - ready on an order with both kitchen and bar items raises
          kitchen:ready so the bar can coordinate serving

        The status write and table release share one transaction. Events go
        out after commit: one order:updated per call, plus kitchen:ready and
        table:updated when they apply.

        Raises:
            InvalidOrderStatusError: If new_status is not a known status
            OrderNotFoundError: If the order does not exist for this tenant
            InvalidStatusTransitionError: In strict mode, for a move outside
                VALID_STATUS_TRANSITIONS
        """
        if new_status not in Order.OrderStatus.values:
            raise InvalidOrderStatusError(f"'{new_status}' is not a valid order status.")

        try:
            order = Order.all_objects.select_for_update().get(id=order_id, tenant=tenant)
        except (Order.DoesNotExist, ValueError, TypeError):
            raise OrderNotFoundError(f"Order {order_id} not found")

        old_status = order.status
        if OrderService.strict_transitions_enabled():
            if new_status not in OrderService.VALID_STATUS_TRANSITIONS.get(old_status, []):
                raise InvalidStatusTransitionError(
                    f"Cannot transition order from {old_status} to {new_status}."
                )

        if old_status != new_status:
            order.status = new_status
            order.save(update_fields=["status", "updated_at"])

        logger.info(f"Order {order.id} of tenant {tenant.slug}: {old_status} -> {new_status}")

        EventBroadcaster.broadcast_on_commit(
            tenant.id, ORDER_UPDATED, {"id": order.id, "status": new_status}
        )

        if new_status == Order.OrderStatus.READY and OrderService.needs_bar_notification(order):
            EventBroadcaster.broadcast_on_commit(
                tenant.id,
                KITCHEN_READY,
                {"orderId": order.id, "tableNumber": order.table_number},
            )
            logger.info(f"Order {order.id} has kitchen and bar items, notifying bar")

        if OrderService.releases_table(new_status):
            OrderService._release_table(order, tenant)

        return order

    # Alias matching the HTTP action name
    update_order_status = advance

    @staticmethod
    def list_orders(tenant, status=None, category=None):
        """
        Orders of the tenant, newest first.

        When category is given each order's items are narrowed to that
        category; totals stay as placed. Kitchen and bar screens use this.
        """
        items_queryset = OrderItem.all_objects.all()
        if category:
            items_queryset = items_queryset.filter(category=category)

        queryset = (
            Order.all_objects.filter(tenant=tenant)
            .select_related("created_by")
            .prefetch_related(Prefetch("items", queryset=items_queryset))
            .order_by("-created_at", "-id")
        )
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    @staticmethod
    def get_order(order_id, tenant) -> Order:
        try:
            return (
                Order.all_objects.select_related("created_by")
                .prefetch_related(Prefetch("items", queryset=OrderItem.all_objects.all()))
                .get(id=order_id, tenant=tenant)
            )
        except (Order.DoesNotExist, ValueError, TypeError):
            raise OrderNotFoundError(f"Order {order_id} not found")

    @staticmethod
    def needs_bar_notification(order) -> bool:
        categories = set(
            OrderItem.all_objects.filter(order=order).values_list("category", flat=True)
        )
        return {Product.Category.KITCHEN, Product.Category.BAR} <= categories

    @staticmethod
    def releases_table(status) -> bool:
        if status == Order.OrderStatus.SERVED:
            return True
        if status == Order.OrderStatus.CANCELLED:
            return getattr(settings, "ORDER_RELEASE_TABLE_ON_CANCEL", True)
        return False

    @staticmethod
    def strict_transitions_enabled() -> bool:
        return getattr(settings, "ORDER_STRICT_TRANSITIONS", False)

    @staticmethod
    def _release_table(order, tenant):
        if TableService.has_active_orders(tenant, order.table_number, exclude_order_id=order.id):
            logger.info(
                f"Table {order.table_number} still has active orders, keeping it occupied"
            )
            return None
        return TableService.set_status(
            tenant, order.table_number, Table.Status.AVAILABLE, missing_ok=True
        )
