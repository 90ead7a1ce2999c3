import logging

from django.db import IntegrityError, transaction

from notifications.services import TABLE_UPDATED, EventBroadcaster
from orders.models import Order

from .exceptions import (
    InvalidTableStatusError,
    TableAlreadyExistsError,
    TableInUseError,
    TableNotFoundError,
)
from .models import Table
from .serializers import TableSerializer

logger = logging.getLogger(__name__)


class TableService:
    """
    Floor plan operations for one tenant.

    Every method takes the tenant explicitly and queries through
    all_objects, so it behaves the same with or without a request context.
    """

    DEFAULT_CAPACITY = 4

    @staticmethod
    def list_tables(tenant, status=None):
        queryset = Table.all_objects.filter(tenant=tenant)
        if status:
            queryset = queryset.filter(status=status)
        return queryset.order_by("number")

    @staticmethod
    def get_table(tenant, number) -> Table:
        try:
            return Table.all_objects.get(tenant=tenant, number=number)
        except Table.DoesNotExist:
            raise TableNotFoundError(f"Table {number} not found")

    @staticmethod
    @transaction.atomic
    def create_table(tenant, number, capacity=None, status=None) -> Table:
        status = status or Table.Status.AVAILABLE
        TableService._validate_status(status)

        if Table.all_objects.filter(tenant=tenant, number=number).exists():
            raise TableAlreadyExistsError(f"Table {number} already exists")

        try:
            # Savepoint so a concurrent duplicate leaves the outer transaction usable
            with transaction.atomic():
                table = Table.all_objects.create(
                    tenant=tenant,
                    number=number,
                    capacity=capacity or TableService.DEFAULT_CAPACITY,
                    status=status,
                )
        except IntegrityError:
            raise TableAlreadyExistsError(f"Table {number} already exists")

        logger.info(f"Created table {number} for tenant {tenant.slug}")
        return table

    @staticmethod
    @transaction.atomic
    def set_status(tenant, number, status, missing_ok=False):
        """
        Set a table's status and announce it with table:updated after commit.

        Returns the table, or None when it does not exist and missing_ok is
        set. Order creation uses missing_ok because an order may name a table
        that is not on the floor plan.
        """
        TableService._validate_status(status)

        table = (
            Table.all_objects.select_for_update()
            .filter(tenant=tenant, number=number)
            .first()
        )
        if table is None:
            if missing_ok:
                logger.debug(f"Table {number} not on floor plan for tenant {tenant.slug}, skipping status {status}")
                return None
            raise TableNotFoundError(f"Table {number} not found")

        if table.status != status:
            table.status = status
            table.save(update_fields=["status", "updated_at"])
            logger.info(f"Table {number} of tenant {tenant.slug} is now {status}")

        EventBroadcaster.broadcast_on_commit(
            tenant.id, TABLE_UPDATED, TableSerializer(table).data
        )
        return table

    @staticmethod
    def has_active_orders(tenant, number, exclude_order_id=None) -> bool:
        queryset = Order.all_objects.filter(
            tenant=tenant, table_number=number
        ).exclude(status__in=Order.INACTIVE_STATUSES)
        if exclude_order_id is not None:
            queryset = queryset.exclude(id=exclude_order_id)
        return queryset.exists()

    @staticmethod
    @transaction.atomic
    def delete_table(tenant, number):
        table = TableService.get_table(tenant, number)

        if TableService.has_active_orders(tenant, number):
            raise TableInUseError(
                f"Table {number} has active orders and cannot be deleted"
            )

        table.delete()
        logger.info(f"Deleted table {number} for tenant {tenant.slug}")

    @staticmethod
    def _validate_status(status):
        if status not in Table.Status.values:
            raise InvalidTableStatusError(
                f"Invalid status. Must be one of: {', '.join(Table.Status.values)}"
            )
