import logging
import secrets
import string

from django.db import transaction
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User

logger = logging.getLogger(__name__)


class AmbiguousLoginError(ValueError):
    """The credentials match staff accounts in more than one restaurant."""
    pass


class UserService:
    # Roles an admin can hand out from the staff screen
    CREATABLE_ROLES = (User.Role.CASHIER, User.Role.KITCHEN, User.Role.BAR)
    GENERATED_PASSWORD_LENGTH = 12

    @staticmethod
    def authenticate_staff(email: str, password: str, tenant=None) -> User | None:
        """
        Authenticate by email and password.

        Runs before tenant context exists, so it looks across tenants with
        all_objects. When the request already named a tenant (X-Tenant header
        or the development fallback) the search is limited to it.
        """
        candidates = User.all_objects.select_related('tenant').filter(
            email__iexact=(email or '').strip(),
            is_active=True,
            tenant__is_active=True,
        )
        if tenant is not None:
            candidates = candidates.filter(tenant=tenant)

        matches = [user for user in candidates if user.check_password(password)]
        if len(matches) > 1:
            raise AmbiguousLoginError(
                "This email is registered with several restaurants. Send the X-Tenant header."
            )
        return matches[0] if matches else None

    @staticmethod
    def generate_tokens_for_user(user: User) -> dict:
        """
        Issue a refresh/access pair carrying the tenant and role claims.

        TenantMiddleware reads tenant_id from the access token to scope the
        request before DRF authentication runs.
        """
        refresh = RefreshToken.for_user(user)
        refresh['tenant_id'] = str(user.tenant_id)
        refresh['tenant_slug'] = user.tenant.slug
        refresh['role'] = user.role
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
        }

    @staticmethod
    def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
        """Random password with at least one lowercase, one uppercase and one digit."""
        alphabet = string.ascii_letters + string.digits
        chars = [
            secrets.choice(string.ascii_lowercase),
            secrets.choice(string.ascii_uppercase),
            secrets.choice(string.digits),
        ]
        chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]
        secrets.SystemRandom().shuffle(chars)
        return ''.join(chars)

    @staticmethod
    def generate_staff_email(tenant, role: str) -> str:
        """First free <role><n>@<tenant slug>.local login in the tenant."""
        taken = set(
            User.all_objects.filter(tenant=tenant, email__istartswith=role)
            .values_list('email', flat=True)
        )
        number = 1
        while f"{role}{number}@{tenant.slug}.local" in taken:
            number += 1
        return f"{role}{number}@{tenant.slug}.local"

    @staticmethod
    @transaction.atomic
    def create_staff(tenant, role: str, email: str = None, first_name: str = '', last_name: str = ''):
        """
        Create a cashier, kitchen or bar account with a generated password.

        Returns (user, password). The plain password is only available here,
        so the caller must hand it to the admin once.

        Raises:
            ValueError: If the role cannot be created here or the email is taken
        """
        if role not in UserService.CREATABLE_ROLES:
            raise ValueError(
                f"Cannot create a user with role '{role}'. "
                f"Allowed roles: {', '.join(UserService.CREATABLE_ROLES)}"
            )

        email = User.objects.normalize_email(email) if email else UserService.generate_staff_email(tenant, role)
        if User.all_objects.filter(tenant=tenant, email__iexact=email).exists():
            raise ValueError("This email is already in use.")

        password = UserService.generate_password()
        user = User.objects.create_user(
            email=email,
            password=password,
            tenant=tenant,
            role=role,
            first_name=first_name or '',
            last_name=last_name or '',
        )
        logger.info(f"Created {role} user {user.email} for tenant {tenant.slug}")
        return user, password

    @staticmethod
    def reset_password(user: User) -> str:
        """Replace the user's password with a generated one and return it."""
        password = UserService.generate_password()
        user.set_password(password)
        user.save(update_fields=['password', 'updated_at'])
        logger.info(f"Password reset for user {user.email} of tenant {user.tenant_id}")
        return password

    @staticmethod
    def delete_staff(user: User, acting_user: User):
        """Delete a staff account. Admins cannot delete their own account."""
        if user.pk == acting_user.pk:
            raise ValueError("You cannot delete your own account.")
        logger.info(f"Deleting user {user.email} of tenant {user.tenant_id}")
        user.delete()
