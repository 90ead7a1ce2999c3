from rest_framework import serializers


class TenantSerializerMixin:
    """
    Mixin for serializers of tenant-owned models.

    - Sets tenant from the request on create
    - Rejects related objects that belong to another tenant

    Usage:
        class TableSerializer(TenantSerializerMixin, BaseModelSerializer):
            class Meta:
                model = Table
                fields = ['id', 'number', 'capacity', 'status']
    """

    def create(self, validated_data):
        validated_data['tenant'] = self.context['request'].tenant
        return super().create(validated_data)

    def validate(self, data):
        tenant = self.context['request'].tenant

        for field_name, field in self.fields.items():
            if isinstance(field, serializers.PrimaryKeyRelatedField):
                value = data.get(field_name)
                if value is not None and getattr(value, 'tenant_id', tenant.id) != tenant.id:
                    raise serializers.ValidationError({
                        field_name: f"Must belong to tenant {tenant.slug}"
                    })

        return super().validate(data)
