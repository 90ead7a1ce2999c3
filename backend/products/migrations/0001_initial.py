import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenant", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Name of the product.", max_length=200)),
                ("category", models.CharField(choices=[("kitchen", "Kitchen"), ("bar", "Bar")], help_text="Which station prepares this product.", max_length=20)),
                ("price", models.DecimalField(decimal_places=2, help_text="The selling price of the product.", max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ("description", models.TextField(blank=True, help_text="Detailed description of the product.")),
                ("icon", models.CharField(blank=True, max_length=50)),
                ("image_url", models.URLField(blank=True, max_length=500)),
                ("available", models.BooleanField(default=True, help_text="Unavailable products stay in the catalog but are hidden from the POS grid.")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="products", to="tenant.tenant")),
            ],
            options={
                "verbose_name": "Product",
                "verbose_name_plural": "Products",
                "ordering": ["category", "name"],
                "indexes": [
                    models.Index(fields=["tenant", "category"], name="product_tenant_category_idx"),
                    models.Index(fields=["tenant", "available"], name="product_tenant_avail_idx"),
                ],
            },
        ),
    ]
