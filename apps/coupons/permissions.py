from rest_framework import permissions


class IsCouponOwner(permissions.BasePermission):
    """
    Permission: User must own the coupon.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Coupon instance
        return obj.user_id == request.user.id
