from collections.abc import Iterable, Sequence
from datetime import date
from functools import wraps
from typing import Protocol

from django.db import DatabaseError

from booking.models import Booking
from hotel.models import Hotel
from room.models import Room
from search.exceptions import StorageError


class InventoryRepository(Protocol):
    """Read-only access to the inventory the availability search works on."""

    def find_hotels_by_city(self, pattern: str) -> Sequence[Hotel]:
        ...

    def find_hotels_in_cities(self, cities: Iterable[str]) -> Sequence[Hotel]:
        ...

    def find_rooms_by_hotel_ids(self, ids: Iterable[int]) -> Sequence[Room]:
        ...

    def find_bookings_by_room_ids_overlapping(
            self, ids: Iterable[int], check_in: date, check_out: date
    ) -> Sequence[Booking]:
        ...


def _storage_errors(method):
    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            raise StorageError(method.__name__) from exc

    return wrapper


class DjangoInventoryRepository:
    @_storage_errors
    def find_hotels_by_city(self, pattern):
        return list(Hotel.objects.filter(city__icontains=pattern).order_by("id"))

    @_storage_errors
    def find_hotels_in_cities(self, cities):
        hotels = Hotel.objects.none()
        for city in cities:
            hotels = hotels | Hotel.objects.filter(city__iexact=city)
        return list(hotels.order_by("id"))

    @_storage_errors
    def find_rooms_by_hotel_ids(self, ids):
        return list(Room.objects.filter(hotel_id__in=list(ids)).order_by("id"))

    @_storage_errors
    def find_bookings_by_room_ids_overlapping(self, ids, check_in, check_out):
        return list(
            Booking.objects.active()
            .overlapping(check_in, check_out)
            .filter(room_id__in=list(ids))
            .only("id", "room_id", "status", "check_in_date", "check_out_date")
        )
