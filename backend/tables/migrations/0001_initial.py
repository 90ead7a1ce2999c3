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
            name="Table",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("number", models.PositiveIntegerField(help_text="Table number shown on the floor plan, unique per restaurant.", validators=[django.core.validators.MinValueValidator(1)])),
                ("capacity", models.PositiveIntegerField(default=4)),
                ("status", models.CharField(choices=[("available", "Available"), ("occupied", "Occupied"), ("reserved", "Reserved")], default="available", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="tables", to="tenant.tenant")),
            ],
            options={
                "ordering": ["number"],
                "indexes": [
                    models.Index(fields=["tenant", "status"], name="table_tenant_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("tenant", "number"), name="unique_table_number_per_tenant"),
                ],
            },
        ),
    ]
