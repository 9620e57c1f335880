from rest_framework import permissions

from .models import UserRole


class HasRole(permissions.BasePermission):
    """
    Permission: authenticated user whose stored role matches `required_role`.

    Unauthenticated requests are rejected with 401 by DRF; authenticated
    users with the other role get 403.
    """

    required_role = None
    message = 'This action is not available for your account type.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.role == self.required_role


class IsStudent(HasRole):
    """Permission: only student accounts."""

    required_role = UserRole.STUDENT
    message = 'Only student accounts can perform this action.'


class IsBusiness(HasRole):
    """Permission: only business accounts."""

    required_role = UserRole.BUSINESS
    message = 'Only business accounts can perform this action.'


class IsStudentOrReadOnly(IsStudent):
    """Permission: anyone may read, only students may write."""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)


class IsBusinessOrReadOnly(IsBusiness):
    """Permission: anyone may read, only business accounts may write."""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)
