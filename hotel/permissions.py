from rest_framework.permissions import SAFE_METHODS, BasePermission


def _owning_hotel(obj):
    return getattr(obj, "hotel", obj)


class IsHotelOwnerOrReadOnly(BasePermission):
    """
    Anyone may read. Writes need a hotel owner or an administrator,
    and changes to an existing hotel (or one of its rooms) need the
    owner of that hotel.
    """

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and (user.is_administrator or user.is_hotel_owner)
        )

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        if request.user.is_administrator:
            return True
        return _owning_hotel(obj).owner_id == request.user.id
