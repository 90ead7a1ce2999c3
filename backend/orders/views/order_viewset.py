import logging

from rest_framework import status
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from orders.exceptions import OrderNotFoundError
from orders.models import Order
from orders.serializers import OrderCreateSerializer, OrderSerializer
from orders.services import OrderService
from users.permissions import CanChangeOrderStatus, CanCreateOrders, IsTenantStaff

from .status_actions import StatusActionsMixin

logger = logging.getLogger(__name__)


class OrderViewSet(StatusActionsMixin, BaseViewSet):
    """
    Orders of the current tenant.

    Supports:
    - ?status=pending|preparing|ready|served|cancelled
    - ?category=kitchen|bar (narrows each order's items, for station screens)
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    ordering = ["-created_at", "-id"]

    def get_permissions(self):
        if self.action == "create":
            permission_classes = [IsTenantStaff, CanCreateOrders]
        elif self.action == "update_status":
            permission_classes = [IsTenantStaff, CanChangeOrderStatus]
        else:
            permission_classes = [IsTenantStaff]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        return OrderService.list_orders(
            self.request.tenant,
            status=self.request.query_params.get("status"),
            category=self.request.query_params.get("category"),
        )

    def retrieve(self, request, *args, **kwargs):
        try:
            order = OrderService.get_order(kwargs["pk"], request.tenant)
        except OrderNotFoundError as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(self.get_serializer(order).data)

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = OrderService.create_order(
                tenant=request.tenant,
                created_by=request.user,
                **serializer.validated_data,
            )
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(order).data, status=status.HTTP_201_CREATED)
