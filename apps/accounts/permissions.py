"""
Role based permission classes.

Permission Classes:
    IsAdminRole       - studio admins (or superusers) only
    IsManagerOrAdmin  - managers and admins
"""

from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    """Permission: User must have the ADMIN role."""

    message = 'Admin role required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)


class IsManagerOrAdmin(BasePermission):
    """Permission: User must have the MANAGER or ADMIN role."""

    message = 'Manager or admin role required.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_manager_or_admin)
