from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from tenant.managers import TenantManager


class Table(models.Model):
    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        OCCUPIED = "occupied", _("Occupied")
        RESERVED = "reserved", _("Reserved")

    tenant = models.ForeignKey(
        'tenant.Tenant',
        on_delete=models.CASCADE,
        related_name='tables'
    )
    number = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Table number shown on the floor plan, unique per restaurant."),
    )
    capacity = models.PositiveIntegerField(default=4)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.AVAILABLE
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ["number"]
        constraints = [
            models.UniqueConstraint(
                fields=['tenant', 'number'],
                name='unique_table_number_per_tenant'
            ),
        ]
        indexes = [
            models.Index(fields=['tenant', 'status'], name='table_tenant_status_idx'),
        ]

    def __str__(self):
        return f"Table {self.number}"
