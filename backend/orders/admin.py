from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product_name", "category", "quantity", "price")
    readonly_fields = fields

    def get_queryset(self, request):
        """Use all_objects manager to bypass TenantManager in admin"""
        return OrderItem.all_objects.all()


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "tenant", "table_number", "status", "total_price", "created_at")
    list_filter = ("tenant", "status")
    readonly_fields = ("total_price", "created_by", "created_at", "updated_at")
    inlines = [OrderItemInline]

    def get_queryset(self, request):
        return Order.all_objects.select_related("tenant", "created_by")
