from datetime import date
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from booking.models import Booking
from hotel.models import Hotel
from room.models import Room
from search.exceptions import StorageError
from search.repositories import DjangoInventoryRepository

SEARCH_URL = reverse("search:search")


def search_params(**overrides):
    params = {
        "destination": "Chennai",
        "check_in": "2025-04-30",
        "check_out": "2025-05-01",
        "guests": 1,
    }
    params.update(overrides)
    return params


class SearchViewTests(APITestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(
            email="guest@test.com", password="password123"
        )
        self.hotel = Hotel.objects.create(
            name="Landmark Villa",
            address="Vadanemmeli, Nemmeli",
            contact="+91 9940047463",
            city="Chennai",
            rating=4.5,
        )
        self.room = Room.objects.create(
            hotel=self.hotel,
            room_type="Double Bed",
            price_per_night="11,800",
            amenities=["Room Service", "Pool Access"],
            images=["roomImg11.png"],
        )

    def book(self, check_in, check_out, booking_status=Booking.BookingStatus.CONFIRMED):
        return Booking.objects.create(
            user=self.user,
            room=self.room,
            hotel=self.hotel,
            check_in_date=check_in,
            check_out_date=check_out,
            total_price=11800,
            status=booking_status,
        )

    def test_search_is_public(self):
        response = self.client.get(SEARCH_URL, search_params())

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "found")
        self.assertEqual(response.data["total_results"], 1)

        room = response.data["results"][0]
        self.assertEqual(room["id"], self.room.id)
        self.assertEqual(room["price_per_night"], "11,800")
        self.assertEqual(room["capacity"], 2)
        self.assertEqual(room["hotel"]["name"], "Landmark Villa")
        self.assertEqual(response.data["search_parameters"]["destination"], "Chennai")

    def test_earlier_booking_does_not_block(self):
        self.book(date(2025, 4, 27), date(2025, 4, 28))

        response = self.client.get(SEARCH_URL, search_params())

        self.assertEqual(len(response.data["results"]), 1)

    def test_overlapping_booking_blocks(self):
        self.book(date(2025, 4, 30), date(2025, 5, 2))

        response = self.client.get(SEARCH_URL, search_params())

        self.assertEqual(response.data["results"], [])
        self.assertEqual(response.data["total_results"], 0)

    def test_back_to_back_bookings_do_not_block(self):
        self.book(date(2025, 4, 28), date(2025, 4, 30))
        self.book(date(2025, 5, 1), date(2025, 5, 3))

        response = self.client.get(SEARCH_URL, search_params())

        self.assertEqual(len(response.data["results"]), 1)

    def test_cancelled_booking_does_not_block(self):
        self.book(date(2025, 4, 30), date(2025, 5, 2), Booking.BookingStatus.CANCELLED)

        response = self.client.get(SEARCH_URL, search_params())

        self.assertEqual(len(response.data["results"]), 1)

    def test_unknown_destination(self):
        response = self.client.get(SEARCH_URL, search_params(destination="Atlantis"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["results"], [])
        self.assertEqual(response.data["total_results"], 0)
        self.assertEqual(response.data["status"], "no_hotels")
        self.assertEqual(
            response.data["message"], "No properties found in this destination"
        )

    def test_party_too_large(self):
        response = self.client.get(SEARCH_URL, search_params(guests=5))

        self.assertEqual(response.data["results"], [])

    def test_missing_parameters(self):
        response = self.client.get(SEARCH_URL, {"destination": "Chennai"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("check_in", response.data)
        self.assertIn("check_out", response.data)
        self.assertIn("guests", response.data)

    def test_inverted_range(self):
        response = self.client.get(
            SEARCH_URL, search_params(check_in="2025-05-02", check_out="2025-05-01")
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("check_out", response.data)

    def test_malformed_date(self):
        response = self.client.get(SEARCH_URL, search_params(check_in="30/04/2025"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_sort_and_limit(self):
        Room.objects.create(
            hotel=self.hotel, room_type="Single Room", price_per_night="5,000"
        )

        response = self.client.get(
            SEARCH_URL, search_params(sort="price_asc", limit=1)
        )

        self.assertEqual(response.data["total_results"], 2)
        self.assertEqual(len(response.data["results"]), 1)
        self.assertEqual(response.data["results"][0]["price_per_night"], "5,000")

    @patch("search.repositories.Hotel.objects.filter")
    def test_storage_failure(self, mock_filter):
        mock_filter.side_effect = DatabaseError("connection refused")

        with self.assertLogs("search.views", level="ERROR"):
            response = self.client.get(SEARCH_URL, search_params())

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"detail": "Error searching for rooms"})


class DjangoInventoryRepositoryTests(APITestCase):
    def setUp(self):
        self.repository = DjangoInventoryRepository()
        self.chennai = Hotel.objects.create(
            name="Sea Breeze Villa", address="ECR Road", contact="1", city="Chennai"
        )
        self.pondy = Hotel.objects.create(
            name="Heritage Mansion", address="White Town", contact="2", city="Pondicherry"
        )

    def test_find_hotels_by_city_is_substring_match(self):
        self.assertEqual(self.repository.find_hotels_by_city("CHEN"), [self.chennai])
        self.assertEqual(self.repository.find_hotels_by_city("Atlantis"), [])

    def test_find_hotels_in_cities_is_exact_match(self):
        hotels = self.repository.find_hotels_in_cities(["pondicherry", "Chen"])

        self.assertEqual(hotels, [self.pondy])

    def test_find_bookings_skips_cancelled_and_disjoint(self):
        user = get_user_model().objects.create_user(email="u@test.com", password="x")
        room = Room.objects.create(
            hotel=self.chennai, room_type="Double Bed", price_per_night="8,500"
        )
        common = {"user": user, "room": room, "hotel": self.chennai, "total_price": 1}
        live = Booking.objects.create(
            check_in_date=date(2025, 4, 30), check_out_date=date(2025, 5, 2), **common
        )
        Booking.objects.create(
            check_in_date=date(2025, 4, 30),
            check_out_date=date(2025, 5, 2),
            status=Booking.BookingStatus.CANCELLED,
            **common,
        )
        Booking.objects.create(
            check_in_date=date(2025, 5, 1), check_out_date=date(2025, 5, 3), **common
        )

        bookings = self.repository.find_bookings_by_room_ids_overlapping(
            [room.id], date(2025, 4, 30), date(2025, 5, 1)
        )

        self.assertEqual([b.id for b in bookings], [live.id])

    @patch("search.repositories.Room.objects.filter")
    def test_database_errors_become_storage_errors(self, mock_filter):
        mock_filter.side_effect = DatabaseError("boom")

        with self.assertRaises(StorageError) as ctx:
            self.repository.find_rooms_by_hotel_ids([1])

        self.assertEqual(ctx.exception.operation, "find_rooms_by_hotel_ids")
