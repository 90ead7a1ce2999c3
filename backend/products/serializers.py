from core_backend.base import TimestampedSerializer
from tenant.serializers import TenantSerializerMixin

from .models import Product


class ProductSerializer(TenantSerializerMixin, TimestampedSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "category",
            "price",
            "description",
            "icon",
            "image_url",
            "available",
            "created_at",
            "updated_at",
        ]
