from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from tenant.managers import TenantManager


class Product(models.Model):
    class Category(models.TextChoices):
        KITCHEN = "kitchen", _("Kitchen")
        BAR = "bar", _("Bar")

    tenant = models.ForeignKey(
        'tenant.Tenant',
        on_delete=models.CASCADE,
        related_name='products'
    )
    name = models.CharField(max_length=200, help_text=_("Name of the product."))
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        help_text=_("Which station prepares this product."),
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text=_("The selling price of the product."),
    )
    description = models.TextField(
        blank=True, help_text=_("Detailed description of the product.")
    )
    icon = models.CharField(max_length=50, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    available = models.BooleanField(
        default=True,
        help_text=_("Unavailable products stay in the catalog but are hidden from the POS grid."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()
    all_objects = models.Manager()

    class Meta:
        verbose_name = _("Product")
        verbose_name_plural = _("Products")
        ordering = ["category", "name"]
        indexes = [
            models.Index(fields=['tenant', 'category'], name='product_tenant_category_idx'),
            models.Index(fields=['tenant', 'available'], name='product_tenant_avail_idx'),
        ]

    def __str__(self):
        return self.name
