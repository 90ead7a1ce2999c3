from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from tenant.managers import TenantAwareUserManager


class User(AbstractBaseUser, PermissionsMixin):
    class Role(models.TextChoices):
        ADMIN = "admin", _("Admin")
        CASHIER = "cashier", _("Cashier")
        KITCHEN = "kitchen", _("Kitchen")
        BAR = "bar", _("Bar")

    # Multi-tenancy: Each user belongs to a tenant
    tenant = models.ForeignKey(
        'tenant.Tenant',
        on_delete=models.CASCADE,
        related_name='users',
        help_text=_("The restaurant this user works for")
    )

    # Email is unique per tenant, not globally
    email = models.EmailField(_("email address"))
    first_name = models.CharField(_("first name"), max_length=150, blank=True)
    last_name = models.CharField(_("last name"), max_length=150, blank=True)

    role = models.CharField(
        _("role"), max_length=20, choices=Role.choices, default=Role.CASHIER
    )

    is_active = models.BooleanField(_("active"), default=True)
    is_staff = models.BooleanField(
        _("staff status"),
        default=False,
        help_text=_("Designates whether the user can log into this admin site."),
    )
    date_joined = models.DateTimeField(_("date joined"), default=timezone.now)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    objects = TenantAwareUserManager()  # Default manager: tenant-aware + auth methods
    all_objects = models.Manager()  # Bypass tenant filter (auth only)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['tenant', 'email'],
                name='unique_user_email_per_tenant'
            ),
        ]
        indexes = [
            models.Index(fields=['tenant', 'email']),
            models.Index(fields=['tenant', 'role']),
        ]

    @classmethod
    def check(cls, **kwargs):
        """Allow a non-unique USERNAME_FIELD; uniqueness is per tenant."""
        errors = super().check(**kwargs)
        return [e for e in errors if e.id != 'auth.E003']

    def __str__(self):
        return self.email

    def has_role(self, *roles):
        return self.role in roles
