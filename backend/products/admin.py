from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "tenant", "category", "price", "available")
    list_filter = ("tenant", "category", "available")
    search_fields = ("name", "description")

    def get_queryset(self, request):
        """Use all_objects manager to bypass TenantManager in admin"""
        return Product.all_objects.select_related("tenant")
