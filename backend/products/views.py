import logging

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from users.permissions import IsAdminRole, IsTenantStaff

from .filters import ProductFilter
from .models import Product
from .serializers import ProductSerializer

logger = logging.getLogger(__name__)


class ProductViewSet(BaseViewSet):
    """
    Product catalog for the current tenant.

    Every staff role can read the catalog; only admins change it.
    """
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    ordering = ["category", "name"]

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            permission_classes = [IsTenantStaff]
        else:
            permission_classes = [IsTenantStaff, IsAdminRole]
        return [permission() for permission in permission_classes]

    @action(detail=True, methods=["patch"])
    def toggle(self, request, pk=None):
        """Flip availability without sending the whole product."""
        product = self.get_object()
        product.available = not product.available
        product.save(update_fields=["available", "updated_at"])
        logger.info(f"Product {product.id} availability set to {product.available}")
        return Response(self.get_serializer(product).data, status=status.HTTP_200_OK)
