"""
Role and location based permission classes.
"""
from rest_framework.permissions import BasePermission

MANAGER_ROLES = {"manager", "superadmin"}


def _role(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return None
    return getattr(user, "role", None)


class IsManagerOrSuperadmin(BasePermission):
    """Managers and superadmins only."""
    message = "Forbidden"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) in MANAGER_ROLES


class IsSuperadmin(BasePermission):
    """Only superadmin."""
    message = "Forbidden"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) == "superadmin"
