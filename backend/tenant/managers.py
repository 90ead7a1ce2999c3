from django.contrib.auth.models import BaseUserManager
from django.db import models
from threading import local

# Thread-local storage for current tenant
_thread_locals = local()


def set_current_tenant(tenant):
    """
    Set the current tenant for this thread.

    Args:
        tenant: Tenant instance or None to clear

    This is called by TenantMiddleware and the websocket middleware to
    establish tenant context for the current request/connection.
    """
    _thread_locals.tenant = tenant


def get_current_tenant():
    """
    Get the current tenant for this thread.

    Returns:
        Tenant instance or None if no tenant context is set
    """
    return getattr(_thread_locals, 'tenant', None)


class TenantManager(models.Manager):
    """
    Automatically filters querysets by current tenant.

    FAILS CLOSED: Returns empty queryset if no tenant context is set.
    This prevents accidental data leakage across tenants.

    Usage:
        class Table(models.Model):
            tenant = models.ForeignKey('tenant.Tenant', on_delete=models.CASCADE)
            number = models.PositiveIntegerField()

            objects = TenantManager()  # Default manager (tenant-filtered)
            all_objects = models.Manager()  # Bypass filter for explicit scoping

        # In view:
        tables = Table.objects.all()  # Automatically filtered by request.tenant

        # In a service that receives the tenant explicitly:
        table = Table.all_objects.get(tenant=tenant, number=5)
    """

    def get_queryset(self):
        """
        Return queryset filtered by current tenant.

        If no tenant context is set, returns empty queryset (fail-closed).
        """
        tenant = get_current_tenant()

        if tenant:
            return super().get_queryset().filter(tenant=tenant)

        # FAIL CLOSED: Return empty queryset if no tenant context
        return super().get_queryset().none()


class TenantAwareUserManager(BaseUserManager):
    """
    Manager for the User model with tenant filtering AND auth methods.

    IMPORTANT: Unlike other models, User does NOT fail-closed when no tenant
    context is set. Login and JWT authentication run before the tenant is
    known, so they need to see every user. Uniqueness is enforced per tenant
    by a database constraint.
    """

    def get_queryset(self):
        qs = super().get_queryset()

        tenant = get_current_tenant()
        if tenant:
            qs = qs.filter(tenant=tenant)
        # NOTE: No else clause - returns all users when no tenant context

        return qs

    def get_by_natural_key(self, username):
        """
        Get user by natural key (email).

        Called by Django's authentication system WITHOUT tenant context.
        """
        return self.model.all_objects.get(**{self.model.USERNAME_FIELD: username})

    def _create_user(self, email, password, **extra_fields):
        """Create and save a user with the given email and password."""
        if not email:
            from django.utils.translation import gettext_lazy as _
            raise ValueError(_("The Email must be set"))

        email = self.normalize_email(email)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular staff user."""
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password, **extra_fields):
        """Create and save a superuser."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if hasattr(self.model, 'Role'):
            extra_fields.setdefault("role", self.model.Role.ADMIN)

        if extra_fields.get("is_staff") is not True:
            from django.utils.translation import gettext_lazy as _
            raise ValueError(_("Superuser must have is_staff=True."))
        if extra_fields.get("is_superuser") is not True:
            from django.utils.translation import gettext_lazy as _
            raise ValueError(_("Superuser must have is_superuser=True."))

        return self._create_user(email, password, **extra_fields)
