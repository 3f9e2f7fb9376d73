from rest_framework import permissions


class IsAssignedProviderOrAdmin(permissions.BasePermission):
    """
    Staff can act on any assignment. Otherwise the user must be the login of
    the service provider the assignment is booked for.
    """

    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.is_staff:
            return True
        return obj.service_provider.user_id is not None and obj.service_provider.user_id == user.id
