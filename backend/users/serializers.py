from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from tenant.serializers import TenantSerializerMixin

from .models import User
from .services import UserService


class UserSerializer(serializers.ModelSerializer):
    tenant_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "first_name", "last_name", "role", "tenant_id"]
        read_only_fields = fields


class StaffUserSerializer(TenantSerializerMixin, BaseModelSerializer):
    """
    Staff account as seen by the restaurant's admin.

    Role is fixed at creation; only contact details and the active flag
    can change afterwards.
    """

    tenant_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "role",
            "is_active",
            "tenant_id",
            "date_joined",
        ]
        read_only_fields = ["id", "role", "tenant_id", "date_joined"]

    def validate_email(self, value):
        tenant = self.context["request"].tenant
        queryset = User.all_objects.filter(tenant=tenant, email__iexact=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("This email is already in use.")
        return User.objects.normalize_email(value)


class StaffCreateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=[(role.value, role.label) for role in UserService.CREATABLE_ROLES])
    email = serializers.EmailField(required=False, allow_blank=True)
    first_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    last_name = serializers.CharField(required=False, allow_blank=True, max_length=150)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True, write_only=True, style={"input_type": "password"}
    )
