"""
Permission classes for identity kind and role based access control.
"""
from rest_framework.permissions import SAFE_METHODS, BasePermission

ADMIN_ROLES = {"admin"}
MANAGER_ROLES = {"admin", "department_head"}


def _identity(request):
    user = getattr(request, "user", None)
    return user if user is not None and user.is_authenticated else None


class IsStaffMember(BasePermission):
    """Allow access only to staff identities (not public accounts)."""
    message = "Staff access required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        identity = _identity(request)
        return bool(identity and identity.kind == "staff")


class IsAccountHolder(BasePermission):
    """Allow access only to public account identities."""
    message = "Not an account user"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        identity = _identity(request)
        return bool(identity and identity.kind == "account")


class IsAdminRole(BasePermission):
    """Allow access only to staff with an administrative role."""
    message = "Administrator access required"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        identity = _identity(request)
        return bool(identity and identity.kind == "staff" and identity.role_name in ADMIN_ROLES)


class IsManagerRole(BasePermission):
    """Administrators and department heads: roster edits and leave decisions."""
    message = "Only administrators or department heads can do this"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        identity = _identity(request)
        return bool(identity and identity.kind == "staff" and identity.role_name in MANAGER_ROLES)


class ReadOnly(BasePermission):
    """Allow read-only access (GET, HEAD, OPTIONS)."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return request.method in SAFE_METHODS
