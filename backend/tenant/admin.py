from django.contrib import admin
from django.db.models import Count

from .models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'is_active', 'staff_count', 'table_count', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']
    readonly_fields = ['id', 'created_at', 'updated_at']
    prepopulated_fields = {'slug': ('name',)}

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            _staff_count=Count('users', distinct=True),
            _table_count=Count('tables', distinct=True),
        )

    @admin.display(description='Staff', ordering='_staff_count')
    def staff_count(self, obj):
        return obj._staff_count

    @admin.display(description='Tables', ordering='_table_count')
    def table_count(self, obj):
        return obj._table_count
