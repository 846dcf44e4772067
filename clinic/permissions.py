"""
Role based access control for the API.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

DOCTOR = "DOCTOR"
STAFF_ROLES = {"DOCTOR", "NURSE", "ADMIN"}


def _role(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return None
    return getattr(user, "role", None)


class IsDoctorRole(BasePermission):
    """Allow access only to doctors."""
    message = "Only doctors can perform this action"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) == DOCTOR


class IsDoctorOrReadOnly(BasePermission):
    """Any staff member may read; only doctors may write."""
    message = "Only doctors can modify records"

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        role = _role(request)
        if request.method in SAFE_METHODS:
            return role in STAFF_ROLES
        return role == DOCTOR

