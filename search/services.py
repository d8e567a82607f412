"""
Room availability search.

Given a destination, a stay ``[check_in, check_out)`` and a party size,
find the rooms of matching hotels that no live booking holds for any
night of the stay and that sleep the whole party.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional

from room.capacity import room_capacity
from room.filters import RoomSort
from room.pricing import parse_price
from search.exceptions import InvalidSearchCriteria
from search.repositories import InventoryRepository

logger = logging.getLogger(__name__)

CANCELLED = "cancelled"
MAX_PAGE_SIZE = 100


class SearchStatus(str, Enum):
    FOUND = "found"
    NO_HOTELS = "no_hotels"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class SearchCriteria:
    destination: str
    check_in: date
    check_out: date
    guests: int
    sort: Optional[str] = None
    page: int = 1
    limit: Optional[int] = None

    def validate(self) -> None:
        errors = {}
        if not isinstance(self.destination, str) or not self.destination.strip():
            errors["destination"] = ["This field is required."]
        if not isinstance(self.check_in, date):
            errors["check_in"] = ["A valid date is required."]
        if not isinstance(self.check_out, date):
            errors["check_out"] = ["A valid date is required."]
        elif isinstance(self.check_in, date) and self.check_in >= self.check_out:
            errors["check_out"] = ["Check-out must be after check-in."]
        if isinstance(self.guests, bool) or not isinstance(self.guests, int) or self.guests < 1:
            errors["guests"] = ["Guests must be a positive integer."]
        if self.sort is not None and self.sort not in RoomSort.values:
            errors["sort"] = [f"Choose one of: {', '.join(RoomSort.values)}."]
        if self.page < 1:
            errors["page"] = ["Page must be 1 or greater."]
        if self.limit is not None and not 1 <= self.limit <= MAX_PAGE_SIZE:
            errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}."]
        if errors:
            raise InvalidSearchCriteria(errors)


@dataclass(frozen=True)
class RoomWithHotel:
    room: Any
    hotel: Any

    @property
    def capacity(self) -> int:
        return room_capacity(self.room)


@dataclass
class SearchResult:
    results: list[RoomWithHotel] = field(default_factory=list)
    total_results: int = 0
    status: SearchStatus = SearchStatus.FOUND
    message: Optional[str] = None


def intervals_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Half-open intervals: back-to-back stays do not overlap."""
    return start_a < end_b and start_b < end_a


def _rating_key(item: RoomWithHotel):
    rating = item.hotel.rating
    # Missing ratings sort after every rated hotel.
    return (rating is None, -(rating or 0))


SORT_KEYS = {
    RoomSort.PRICE_ASC: (lambda item: parse_price(item.room.price_per_night), False),
    RoomSort.PRICE_DESC: (lambda item: parse_price(item.room.price_per_night), True),
    RoomSort.RATING: (_rating_key, False),
    RoomSort.NEWEST: (lambda item: item.room.created_at, True),
}


class AvailabilitySearch:
    def __init__(
            self,
            repository: InventoryRepository,
            fallback_cities: tuple[str, ...] = (),
    ) -> None:
        self.repository = repository
        self.fallback_cities = tuple(fallback_cities)

    def search(self, criteria: SearchCriteria) -> SearchResult:
        criteria.validate()
        destination = criteria.destination.strip()

        hotels = self.repository.find_hotels_by_city(destination)
        if hotels:
            return self._paginate(self._available(hotels, criteria), criteria)

        if not self.fallback_cities:
            logger.info(f"No hotels found for destination {destination!r}")
            return SearchResult(
                status=SearchStatus.NO_HOTELS,
                message="No properties found in this destination",
            )

        hotels = self.repository.find_hotels_in_cities(self.fallback_cities)
        result = self._paginate(self._available(hotels, criteria), criteria)
        result.status = SearchStatus.FALLBACK
        result.message = (
            f'No hotels found for "{destination}". '
            f"Showing {', '.join(self.fallback_cities)} instead."
        )
        return result

    def _available(self, hotels, criteria: SearchCriteria) -> list[RoomWithHotel]:
        hotels_by_id = {hotel.id: hotel for hotel in hotels}
        if not hotels_by_id:
            return []

        rooms = self.repository.find_rooms_by_hotel_ids(list(hotels_by_id))
        room_ids = [room.id for room in rooms]
        if not room_ids:
            return []

        bookings = self.repository.find_bookings_by_room_ids_overlapping(
            room_ids, criteria.check_in, criteria.check_out
        )
        booked_room_ids = {
            booking.room_id
            for booking in bookings
            if booking.status != CANCELLED
            and intervals_overlap(
                booking.check_in_date,
                booking.check_out_date,
                criteria.check_in,
                criteria.check_out,
            )
        }

        available = [
            RoomWithHotel(room=room, hotel=hotels_by_id[room.hotel_id])
            for room in sorted(rooms, key=lambda r: r.id)
            if room.id not in booked_room_ids
            and room.hotel_id in hotels_by_id
            and criteria.guests <= room_capacity(room)
        ]
        logger.debug(
            f"{len(available)} of {len(rooms)} rooms free for {criteria.guests} "
            f"guests from {criteria.check_in} to {criteria.check_out}"
        )
        return available

    @staticmethod
    def _paginate(items: list[RoomWithHotel], criteria: SearchCriteria) -> SearchResult:
        if criteria.sort:
            key, reverse = SORT_KEYS[RoomSort(criteria.sort)]
            # sorted() is stable, so equal keys keep room id order.
            items = sorted(items, key=key, reverse=reverse)

        total = len(items)
        if criteria.limit:
            start = (criteria.page - 1) * criteria.limit
            items = items[start:start + criteria.limit]

        return SearchResult(results=items, total_results=total)
