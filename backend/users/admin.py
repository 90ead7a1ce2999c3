from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("email", "first_name", "last_name", "tenant", "role", "is_active")
    list_filter = ("tenant", "role", "is_staff", "is_active")
    search_fields = ("email", "first_name", "last_name")
    ordering = ("tenant", "email")

    fieldsets = (
        (None, {"fields": ("tenant", "email", "password")}),
        ("Personal info", {"fields": ("first_name", "last_name")}),
        ("Access", {"fields": ("role", "is_active", "is_staff", "is_superuser")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("tenant", "email", "role", "password1", "password2"),
        }),
    )

    def get_queryset(self, request):
        # Admin runs without tenant context
        return User.all_objects.select_related("tenant")
