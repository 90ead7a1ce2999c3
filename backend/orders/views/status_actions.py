import logging

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from orders.exceptions import OrderNotFoundError
from orders.serializers import UpdateOrderStatusSerializer
from orders.services import OrderService
from users.permissions import CanChangeOrderStatus, IsTenantStaff

logger = logging.getLogger(__name__)


class StatusActionsMixin:
    """
    Mixin for order status transition actions

    This mixin provides action methods for OrderViewSet.
    """

    @action(
        detail=True,
        methods=["put", "patch"],
        url_path="status",
        permission_classes=[IsTenantStaff, CanChangeOrderStatus],
    )
    def update_status(self, request: Request, pk=None) -> Response:
        """
        Moves the order to the status in the body.

        Kitchen, bar and admin screens call this; the response carries no
        order, clients re-fetch or rely on the order:updated event.
        """
        serializer = UpdateOrderStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": "Invalid status"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            OrderService.advance(pk, request.tenant, serializer.validated_data["status"])
        except OrderNotFoundError as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"success": True, "message": "Order status updated"})
