from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from orders.models import Order

from .order_item_serializers import OrderItemInputSerializer, OrderItemSerializer


class OrderSerializer(BaseModelSerializer):
    """
    Full order with its items. This is also the order:created event payload.
    """

    items = OrderItemSerializer(many=True, read_only=True)
    created_by_username = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "table_number",
            "status",
            "comment",
            "total_price",
            "created_by",
            "created_by_username",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = fields
        select_related_fields = ["created_by"]
        prefetch_related_fields = ["items"]

    def get_created_by_username(self, obj):
        return obj.created_by.email if obj.created_by else None


class OrderCreateSerializer(serializers.Serializer):
    table_number = serializers.IntegerField(min_value=1)
    comment = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    items = OrderItemInputSerializer(many=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("An order must contain at least one item.")
        return value
