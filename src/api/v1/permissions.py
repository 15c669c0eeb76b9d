"""Custom DRF permissions for the lead CRM."""
from rest_framework.permissions import BasePermission


class _RolePermission(BasePermission):
    allowed_roles: tuple[str, ...] = ()

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        return getattr(user, "role", None) in self.allowed_roles


class IsAdmin(_RolePermission):
    """Allow access to CRM administrators."""

    allowed_roles = ("admin",)


class IsAdminOrTeamleader(_RolePermission):
    allowed_roles = ("admin", "teamleader")


class CanPriceDeals(_RolePermission):
    """Admins, team leaders and closers may use the deal calculator."""

    allowed_roles = ("admin", "teamleader", "closer")


class CanRequestCredits(_RolePermission):
    """Partner users request credits for their own organization; staff may too."""

    allowed_roles = ("admin", "teamleader", "organization")
