from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """
    Base serializer for project models.

    Subclasses may declare `select_related_fields` and
    `prefetch_related_fields` on Meta; BaseViewSet applies them.
    """

    class Meta:
        select_related_fields = []
        prefetch_related_fields = []


class TimestampedSerializer(BaseModelSerializer):
    """Adds read-only created_at/updated_at to models that carry them."""

    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)
