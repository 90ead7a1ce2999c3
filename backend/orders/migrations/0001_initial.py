import django.db.models.deletion
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("products", "0001_initial"),
        ("tenant", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("table_number", models.PositiveIntegerField(help_text="Number of the table this order is for. Set once at creation.")),
                ("status", models.CharField(choices=[("pending", "Pending"), ("preparing", "Preparing"), ("ready", "Ready"), ("served", "Served"), ("cancelled", "Cancelled")], db_index=True, default="pending", max_length=20)),
                ("comment", models.TextField(blank=True, default="")),
                ("total_price", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Sum of item price snapshots times quantity, fixed at creation.", max_digits=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="orders_created", to=settings.AUTH_USER_MODEL)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="orders", to="tenant.tenant")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["tenant", "status"], name="order_tenant_status_idx"),
                    models.Index(fields=["tenant", "table_number"], name="order_tenant_table_idx"),
                    models.Index(fields=["tenant", "-created_at"], name="order_tenant_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("product_name", models.CharField(max_length=200)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("price", models.DecimalField(decimal_places=2, help_text="Unit price at the time of sale.", max_digits=10)),
                ("category", models.CharField(choices=[("kitchen", "Kitchen"), ("bar", "Bar")], max_length=20)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="orders.order")),
                ("product", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="order_items", to="products.product")),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="order_items", to="tenant.tenant")),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["order", "category"], name="orderitem_order_category_idx"),
                ],
            },
        ),
    ]
