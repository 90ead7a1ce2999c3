from rest_framework import serializers

from core_backend.base import TimestampedSerializer
from tenant.serializers import TenantSerializerMixin

from .models import Table


class TableSerializer(TenantSerializerMixin, TimestampedSerializer):
    class Meta:
        model = Table
        fields = ["id", "number", "capacity", "status", "created_at", "updated_at"]
        # Uniqueness per tenant is checked by TableService
        validators = []


class TableStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Table.Status.choices)
