from rest_framework.permissions import BasePermission, SAFE_METHODS


def _can_post(user):
    if not user or not user.is_authenticated:
        return False
    return user.can_post_transactions()


class IsAdminOrReadOnly(BasePermission):
    """
    Viewers may read everything; only admins and superadmins may write.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return _can_post(request.user)


class IsAdminRole(BasePermission):
    def has_permission(self, request, view):
        return _can_post(request.user)
