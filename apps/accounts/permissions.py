"""
Role-based permission classes shared by all apps.

Usage:
    class PaymentRequestViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, IsConductor]
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

from .models import UserRole
from .services.roles import check_route_permission


class HasRole(BasePermission):
    """Allow users whose role is in ``allowed_roles``."""

    allowed_roles = ()
    message = 'Your account role cannot access this resource.'

    def has_permission(self, request, view):
        return check_route_permission(user=request.user, allowed_roles=self.allowed_roles)


class IsPassenger(HasRole):
    allowed_roles = (UserRole.PASSENGER,)
    message = 'Only passengers can perform this action.'


class IsConductor(HasRole):
    allowed_roles = (UserRole.CONDUCTOR,)
    message = 'Only conductors can perform this action.'


class IsInspector(HasRole):
    allowed_roles = (UserRole.INSPECTOR,)
    message = 'Only inspectors can perform this action.'


class IsConductorOrStaffOrReadOnly(BasePermission):
    """
    Read access for any authenticated user, writes for conductors and staff.

    Used for fare discount configuration.
    """

    message = 'Only conductors or staff can change this resource.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        user = request.user
        return bool(user and user.is_authenticated and (user.is_staff or user.is_conductor))
