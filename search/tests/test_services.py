from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from search.exceptions import InvalidSearchCriteria
from search.services import (
    AvailabilitySearch,
    SearchCriteria,
    SearchStatus,
    intervals_overlap,
)


class InMemoryInventory:
    """Inventory backed by plain lists; bookings are returned unfiltered."""

    def __init__(self, hotels=(), rooms=(), bookings=()):
        self.hotels = list(hotels)
        self.rooms = list(rooms)
        self.bookings = list(bookings)

    def find_hotels_by_city(self, pattern):
        return [h for h in self.hotels if pattern.casefold() in h.city.casefold()]

    def find_hotels_in_cities(self, cities):
        wanted = {city.casefold() for city in cities}
        return [h for h in self.hotels if h.city.casefold() in wanted]

    def find_rooms_by_hotel_ids(self, ids):
        ids = set(ids)
        return [r for r in self.rooms if r.hotel_id in ids]

    def find_bookings_by_room_ids_overlapping(self, ids, check_in, check_out):
        ids = set(ids)
        return [b for b in self.bookings if b.room_id in ids]


def make_hotel(id, city="Chennai", rating=None, name=None):
    return SimpleNamespace(
        id=id,
        name=name or f"Hotel {id}",
        address="",
        city=city,
        contact="",
        rating=rating,
    )


def make_room(id, hotel_id=1, room_type="Double Bed", capacity=None,
              price="11,800", created_day=1):
    return SimpleNamespace(
        id=id,
        hotel_id=hotel_id,
        room_type=room_type,
        capacity=capacity,
        price_per_night=price,
        created_at=datetime(2025, 1, created_day, tzinfo=timezone.utc),
    )


def make_booking(room_id, check_in, check_out, status="confirmed"):
    return SimpleNamespace(
        room_id=room_id,
        check_in_date=check_in,
        check_out_date=check_out,
        status=status,
    )


def criteria(**overrides):
    params = {
        "destination": "Chennai",
        "check_in": date(2025, 4, 30),
        "check_out": date(2025, 5, 1),
        "guests": 1,
    }
    params.update(overrides)
    return SearchCriteria(**params)


def room_ids(result):
    return [item.room.id for item in result.results]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((date(2025, 5, 1), date(2025, 5, 3)), (date(2025, 5, 2), date(2025, 5, 4)), True),
        ((date(2025, 5, 1), date(2025, 5, 3)), (date(2025, 5, 3), date(2025, 5, 5)), False),
        ((date(2025, 5, 3), date(2025, 5, 5)), (date(2025, 5, 1), date(2025, 5, 3)), False),
        ((date(2025, 5, 1), date(2025, 5, 10)), (date(2025, 5, 4), date(2025, 5, 5)), True),
    ],
)
def test_intervals_overlap(a, b, expected):
    assert intervals_overlap(*a, *b) is expected
    assert intervals_overlap(*b, *a) is expected


class TestAvailabilitySearch:
    def setup_method(self):
        self.hotel = make_hotel(1, rating=4.5)
        self.room = make_room(10)
        self.inventory = InMemoryInventory(hotels=[self.hotel], rooms=[self.room])
        self.search = AvailabilitySearch(self.inventory)

    def test_room_with_earlier_booking_is_available(self):
        self.inventory.bookings.append(
            make_booking(10, date(2025, 4, 27), date(2025, 4, 28))
        )

        result = self.search.search(criteria())

        assert result.status is SearchStatus.FOUND
        assert room_ids(result) == [10]
        assert result.total_results == 1
        assert result.results[0].hotel is self.hotel

    def test_overlapping_booking_excludes_room(self):
        self.inventory.bookings.append(
            make_booking(10, date(2025, 4, 30), date(2025, 5, 2))
        )

        result = self.search.search(criteria())

        assert result.results == []
        assert result.total_results == 0
        assert result.status is SearchStatus.FOUND

    def test_booking_ending_on_check_in_does_not_block(self):
        self.inventory.bookings.append(
            make_booking(10, date(2025, 4, 28), date(2025, 4, 30))
        )

        assert room_ids(self.search.search(criteria())) == [10]

    def test_booking_starting_on_check_out_does_not_block(self):
        self.inventory.bookings.append(
            make_booking(10, date(2025, 5, 1), date(2025, 5, 3))
        )

        assert room_ids(self.search.search(criteria())) == [10]

    @pytest.mark.parametrize("status, blocked", [
        ("pending", True),
        ("confirmed", True),
        ("cancelled", False),
    ])
    def test_only_live_bookings_block(self, status, blocked):
        self.inventory.bookings.append(
            make_booking(10, date(2025, 4, 29), date(2025, 5, 2), status=status)
        )

        result = self.search.search(criteria())

        assert room_ids(result) == ([] if blocked else [10])

    def test_unknown_destination_is_not_an_error(self):
        result = self.search.search(criteria(destination="Atlantis"))

        assert result.results == []
        assert result.total_results == 0
        assert result.status is SearchStatus.NO_HOTELS
        assert result.message == "No properties found in this destination"

    def test_destination_matches_part_of_city_case_insensitively(self):
        assert room_ids(self.search.search(criteria(destination="  chen "))) == [10]

    def test_party_too_large_for_room_label(self):
        assert self.search.search(criteria(guests=5)).results == []

    @pytest.mark.parametrize("room_type, guests, fits", [
        ("Single Room", 1, True),
        ("Single Room", 2, False),
        ("double bed", 2, True),
        ("DOUBLE BED", 3, False),
        ("Family Beach Room", 4, True),
        ("Family Beach Room", 5, False),
        ("Executive Suite", 2, True),
        ("Executive Suite", 3, False),
    ])
    def test_capacity_from_room_label(self, room_type, guests, fits):
        self.room.room_type = room_type

        result = self.search.search(criteria(guests=guests))

        assert room_ids(result) == ([10] if fits else [])

    def test_explicit_capacity_wins_over_label(self):
        self.room.capacity = 5

        assert room_ids(self.search.search(criteria(guests=5))) == [10]

    def test_rooms_of_other_cities_are_excluded(self):
        self.inventory.hotels.append(make_hotel(2, city="Pondicherry"))
        self.inventory.rooms.append(make_room(20, hotel_id=2))

        assert room_ids(self.search.search(criteria())) == [10]

    def test_search_is_idempotent(self):
        self.inventory.rooms.append(make_room(11))
        self.inventory.bookings.append(
            make_booking(11, date(2025, 4, 30), date(2025, 5, 1))
        )

        first = self.search.search(criteria())
        second = self.search.search(criteria())

        assert room_ids(first) == room_ids(second) == [10]
        assert first.total_results == second.total_results

    def test_results_default_to_room_id_order(self):
        self.inventory.rooms = [make_room(12), make_room(10), make_room(11)]

        assert room_ids(self.search.search(criteria())) == [10, 11, 12]

    def test_invalid_criteria_raise(self):
        with pytest.raises(InvalidSearchCriteria) as excinfo:
            self.search.search(
                criteria(
                    destination=" ",
                    check_in=date(2025, 5, 2),
                    check_out=date(2025, 5, 1),
                    guests=0,
                )
            )

        assert set(excinfo.value.errors) == {"destination", "check_out", "guests"}

    def test_same_day_stay_is_invalid(self):
        with pytest.raises(InvalidSearchCriteria):
            self.search.search(criteria(check_out=date(2025, 4, 30)))

    def test_unknown_sort_is_invalid(self):
        with pytest.raises(InvalidSearchCriteria):
            self.search.search(criteria(sort="cheapest"))


class TestSortingAndPaging:
    def setup_method(self):
        hotels = [
            make_hotel(1, rating=4.5),
            make_hotel(2, rating=4.9),
            make_hotel(3, rating=None),
        ]
        rooms = [
            make_room(1, hotel_id=1, price="11,800", created_day=1),
            make_room(2, hotel_id=2, price="5,000", created_day=3),
            make_room(3, hotel_id=3, price="15,000", created_day=2),
            make_room(4, hotel_id=1, price="5,000", created_day=4),
        ]
        self.search = AvailabilitySearch(InMemoryInventory(hotels, rooms))

    @pytest.mark.parametrize("sort, expected", [
        ("price_asc", [2, 4, 1, 3]),
        ("price_desc", [3, 1, 2, 4]),
        ("rating", [2, 1, 4, 3]),
        ("newest", [4, 2, 3, 1]),
    ])
    def test_sort(self, sort, expected):
        assert room_ids(self.search.search(criteria(sort=sort))) == expected

    def test_limit_slices_after_counting(self):
        result = self.search.search(criteria(sort="price_asc", page=2, limit=3))

        assert room_ids(result) == [3]
        assert result.total_results == 4

    def test_page_past_the_end_is_empty(self):
        result = self.search.search(criteria(page=3, limit=2))

        assert result.results == []
        assert result.total_results == 4


class TestFallbackCities:
    def setup_method(self):
        self.inventory = InMemoryInventory(
            hotels=[make_hotel(1, city="Chennai"), make_hotel(2, city="Pondicherry")],
            rooms=[make_room(10, hotel_id=1), make_room(20, hotel_id=2)],
        )

    def test_fallback_is_off_by_default(self):
        result = AvailabilitySearch(self.inventory).search(
            criteria(destination="Atlantis")
        )

        assert result.status is SearchStatus.NO_HOTELS

    def test_unknown_destination_falls_back_to_allowlist(self):
        search = AvailabilitySearch(self.inventory, fallback_cities=("pondicherry",))

        result = search.search(criteria(destination="Atlantis"))

        assert result.status is SearchStatus.FALLBACK
        assert room_ids(result) == [20]
        assert "Atlantis" in result.message

    def test_known_destination_ignores_fallback(self):
        search = AvailabilitySearch(self.inventory, fallback_cities=("Pondicherry",))

        result = search.search(criteria())

        assert result.status is SearchStatus.FOUND
        assert room_ids(result) == [10]
