from django.contrib import admin

from .models import Table


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ("number", "tenant", "capacity", "status")
    list_filter = ("tenant", "status")

    def get_queryset(self, request):
        return Table.all_objects.select_related("tenant")
