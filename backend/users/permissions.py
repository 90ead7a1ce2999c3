from rest_framework import permissions

from .models import User


class IsTenantStaff(permissions.BasePermission):
    """Authenticated user whose tenant is the request's tenant."""

    message = "You do not have access to this restaurant."

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        tenant = getattr(request, 'tenant', None)
        return tenant is not None and user.tenant_id == tenant.id


def HasRole(*roles):
    """
    Build a permission class that admits only the given roles.

    Usage:
        permission_classes = [IsTenantStaff, HasRole(User.Role.CASHIER, User.Role.ADMIN)]
    """

    class _HasRole(permissions.BasePermission):
        message = "Your role is not allowed to perform this action."

        def has_permission(self, request, view):
            user = request.user
            return bool(user and user.is_authenticated and user.role in roles)

    _HasRole.__name__ = f"HasRole_{'_'.join(roles)}"
    return _HasRole


IsAdminRole = HasRole(User.Role.ADMIN)
CanCreateOrders = HasRole(User.Role.CASHIER, User.Role.ADMIN)
CanChangeOrderStatus = HasRole(User.Role.KITCHEN, User.Role.BAR, User.Role.ADMIN)
CanChangeTableStatus = HasRole(User.Role.CASHIER, User.Role.ADMIN)
