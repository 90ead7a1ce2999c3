from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from products.models import Product
from tenant.managers import TenantManager


class Order(models.Model):
    class OrderStatus(models.TextChoices):
        PENDING = "pending", _("Pending")  # Sent by the cashier, not started
        PREPARING = "preparing", _("Preparing")  # Kitchen or bar working on it
        READY = "ready", _("Ready")  # Waiting to be carried to the table
        SERVED = "served", _("Served")  # Delivered; frees the table
        CANCELLED = "cancelled", _("Cancelled")

    # An order in one of these no longer keeps its table occupied
    INACTIVE_STATUSES = (OrderStatus.SERVED, OrderStatus.CANCELLED)

    tenant = models.ForeignKey(
        'tenant.Tenant',
        on_delete=models.CASCADE,
        related_name='orders'
    )
    table_number = models.PositiveIntegerField(
        help_text=_("Number of the table this order is for. Set once at creation.")
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )
    comment = models.TextField(blank=True, default="")
    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Sum of item price snapshots times quantity, fixed at creation."),
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders_created",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=['tenant', 'status'], name='order_tenant_status_idx'),
            models.Index(fields=['tenant', 'table_number'], name='order_tenant_table_idx'),
            models.Index(fields=['tenant', '-created_at'], name='order_tenant_created_idx'),
        ]

    def __str__(self):
        return f"Order {self.id} (table {self.table_number}, {self.status})"

    @property
    def is_active(self):
        return self.status not in self.INACTIVE_STATUSES


class OrderItem(models.Model):
    """
    One line of an order. Name, price and category are copied from the
    product when the order is placed and never follow later catalog edits.
    """

    tenant = models.ForeignKey(
        'tenant.Tenant',
        on_delete=models.CASCADE,
        related_name='order_items'
    )
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )
    product_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(default=1)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Unit price at the time of sale."),
    )
    category = models.CharField(max_length=20, choices=Product.Category.choices)

    objects = TenantManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=['order', 'category'], name='orderitem_order_category_idx'),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.product_name}"

    @property
    def total_price(self):
        return self.price * self.quantity
