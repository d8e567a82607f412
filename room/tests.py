from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from booking.models import Booking
from hotel.models import Hotel
from room.capacity import room_capacity, room_capacity_expression
from room.models import Room


def rooms_url():
    return reverse("room:rooms-list")


def room_detail_url(room_id: int) -> str:
    return reverse("room:rooms-detail", args=[room_id])


def room_calendar_url(room_id: int) -> str:
    return reverse("room:rooms-get-calendar", args=[room_id])


def create_user(**params):
    defaults = {
        "email": "user@test.com",
        "password": "test12345",
    }
    defaults.update(params)
    return get_user_model().objects.create_user(**defaults)


def create_owner(**params):
    defaults = {
        "email": "owner@test.com",
        "role": get_user_model().Role.HOTEL_OWNER,
    }
    defaults.update(params)
    return create_user(**defaults)


def create_admin(**params):
    defaults = {
        "email": "admin@test.com",
        "password": "test12345",
    }
    defaults.update(params)
    return get_user_model().objects.create_superuser(**defaults)


def create_hotel(**params):
    defaults = {
        "name": "Landmark Villa",
        "address": "Vadanemmeli, Nemmeli",
        "contact": "+91 9940047463",
        "city": "Chennai",
        "rating": 4.5,
    }
    defaults.update(params)
    return Hotel.objects.create(**defaults)


def create_room(**params):
    defaults = {
        "room_type": "Double Bed",
        "price_per_night": "11,800",
        "amenities": ["Room Service", "Pool Access"],
    }
    defaults.update(params)
    if "hotel" not in defaults:
        defaults["hotel"] = create_hotel()
    return Room.objects.create(**defaults)


def result_ids(res):
    return [room["id"] for room in res.data["results"]]


class PublicRoomApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.hotel = create_hotel()

    def test_list_rooms_allowed_for_anon(self):
        create_room(hotel=self.hotel)
        create_room(hotel=self.hotel)

        res = self.client.get(rooms_url())

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["count"], 2)
        self.assertEqual(len(res.data["results"]), 2)

    def test_create_room_unauthorized_for_anon(self):
        payload = {
            "hotel": self.hotel.id,
            "room_type": "Single Bed",
            "price_per_night": "5,000",
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_retrieve_room_with_hotel_and_similar_rooms(self):
        room = create_room(hotel=self.hotel)
        similar = [create_room(hotel=self.hotel) for _ in range(5)]
        create_room(hotel=create_hotel(name="Elsewhere"))

        res = self.client.get(room_detail_url(room.id))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["hotel_detail"]["name"], "Landmark Villa")
        self.assertEqual(res.data["max_guests"], 2)
        self.assertEqual(
            [r["id"] for r in res.data["similar_rooms"]],
            [r.id for r in similar[:4]],
        )


class PrivateRoomApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = create_user(email="user@test.com", password="test12345")
        self.client.force_authenticate(self.user)
        self.hotel = create_hotel()

    def test_create_room_forbidden_for_guest(self):
        payload = {
            "hotel": self.hotel.id,
            "room_type": "Family Suite",
            "price_per_night": "18,000",
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_room_forbidden_for_guest(self):
        room = create_room(hotel=self.hotel)

        res = self.client.patch(room_detail_url(room.id), {"capacity": 10}, format="json")

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_room_forbidden_for_guest(self):
        room = create_room(hotel=self.hotel)

        res = self.client.delete(room_detail_url(room.id))

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class HotelOwnerRoomApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = create_owner()
        self.client.force_authenticate(self.owner)
        self.hotel = create_hotel(owner=self.owner)

    def test_create_room_normalizes_price(self):
        payload = {
            "hotel": self.hotel.id,
            "room_type": "Deluxe Sea View",
            "price_per_night": "8500",
            "capacity": 2,
            "amenities": ["Sea View", "Balcony"],
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        room = Room.objects.get(id=res.data["id"])
        self.assertEqual(room.price_per_night, "8,500")
        self.assertEqual(room.price_amount, 8500)
        self.assertEqual(res.data["price_per_night"], "8,500")

    def test_create_room_rejects_bad_price(self):
        payload = {
            "hotel": self.hotel.id,
            "room_type": "Deluxe Sea View",
            "price_per_night": "about 8k",
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price_per_night", res.data)

    def test_cannot_add_room_to_other_owners_hotel(self):
        other_hotel = create_hotel(owner=create_owner(email="other@test.com"))
        payload = {
            "hotel": other_hotel.id,
            "room_type": "Single Bed",
            "price_per_night": "5,000",
        }

        res = self.client.post(rooms_url(), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("hotel", res.data)

    def test_patch_own_room(self):
        room = create_room(hotel=self.hotel)

        res = self.client.patch(
            room_detail_url(room.id),
            {"capacity": 3, "price_per_night": "12,000"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        room.refresh_from_db()
        self.assertEqual(room.capacity, 3)
        self.assertEqual(room.price_amount, 12000)

    def test_cannot_patch_other_owners_room(self):
        room = create_room(hotel=create_hotel(owner=create_owner(email="other@test.com")))

        res = self.client.patch(room_detail_url(room.id), {"capacity": 3}, format="json")

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)


class AdminRoomApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = create_admin(email="admin@test.com", password="test12345")
        self.client.force_authenticate(self.admin)
        self.hotel = create_hotel()

    def test_put_room_success(self):
        room = create_room(hotel=self.hotel)

        payload = {
            "hotel": self.hotel.id,
            "room_type": "Family Suite",
            "price_per_night": "18,000",
            "capacity": 5,
        }

        res = self.client.put(room_detail_url(room.id), payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        room.refresh_from_db()
        self.assertEqual(room.room_type, "Family Suite")
        self.assertEqual(room.price_per_night, "18,000")
        self.assertEqual(room.capacity, 5)

    def test_delete_room_success(self):
        room = create_room(hotel=self.hotel)

        res = self.client.delete(room_detail_url(room.id))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Room.objects.filter(id=room.id).exists())


class RoomListFilterTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        chennai = create_hotel(city="Chennai", rating=4.5)
        pondy = create_hotel(name="Heritage Mansion", city="Pondicherry", rating=4.9)
        self.cheap = create_room(
            hotel=chennai, room_type="Single Bed", price_per_night="5,000",
            amenities=["Free WiFi"],
        )
        self.mid = create_room(
            hotel=pondy, room_type="Double Bed", price_per_night="9,800",
            amenities=["Free WiFi", "Sea View"],
        )
        self.expensive = create_room(
            hotel=chennai, room_type="Family Suite", price_per_night="18,000",
            amenities=["Kitchen", "Free WiFi", "Sea View"],
        )
        now = timezone.now()
        for days_ago, room in enumerate((self.expensive, self.mid, self.cheap)):
            Room.objects.filter(id=room.id).update(created_at=now - timedelta(days=days_ago))

    def test_default_sort_is_newest_first(self):
        res = self.client.get(rooms_url())

        self.assertEqual(
            result_ids(res), [self.expensive.id, self.mid.id, self.cheap.id]
        )

    def test_filter_by_room_type(self):
        res = self.client.get(rooms_url(), {"room_type": "double bed"})

        self.assertEqual(result_ids(res), [self.mid.id])

    def test_filter_by_location(self):
        res = self.client.get(rooms_url(), {"location": "pondi"})

        self.assertEqual(result_ids(res), [self.mid.id])

    def test_filter_by_min_capacity_uses_room_label(self):
        res = self.client.get(rooms_url(), {"min_capacity": 2})

        self.assertEqual(result_ids(res), [self.expensive.id, self.mid.id])

    def test_filter_by_min_capacity_prefers_explicit_capacity(self):
        Room.objects.filter(id=self.cheap.id).update(capacity=3)

        res = self.client.get(rooms_url(), {"min_capacity": 3})

        self.assertEqual(result_ids(res), [self.expensive.id, self.cheap.id])

    def test_filter_by_price_range_with_separators(self):
        res = self.client.get(
            rooms_url(), {"min_price": "6,000", "max_price": "18,000"}
        )

        self.assertEqual(sorted(result_ids(res)), [self.mid.id, self.expensive.id])

    def test_invalid_price_filter_returns_400(self):
        res = self.client.get(rooms_url(), {"min_price": "cheap"})

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_filter_by_all_amenities(self):
        res = self.client.get(rooms_url(), {"amenities": "Sea View,Free WiFi"})

        self.assertEqual(sorted(result_ids(res)), [self.mid.id, self.expensive.id])

    def test_sort_by_price(self):
        res = self.client.get(rooms_url(), {"sort_by": "price_asc"})
        self.assertEqual(
            result_ids(res), [self.cheap.id, self.mid.id, self.expensive.id]
        )

        res = self.client.get(rooms_url(), {"sort_by": "price_desc"})
        self.assertEqual(
            result_ids(res), [self.expensive.id, self.mid.id, self.cheap.id]
        )

    def test_sort_by_rating_breaks_ties_by_id(self):
        res = self.client.get(rooms_url(), {"sort_by": "rating"})

        self.assertEqual(
            result_ids(res), [self.mid.id, self.cheap.id, self.expensive.id]
        )

    def test_unknown_sort_returns_400(self):
        res = self.client.get(rooms_url(), {"sort_by": "featured"})

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_pagination_with_limit(self):
        res = self.client.get(rooms_url(), {"sort_by": "price_asc", "limit": 2, "page": 2})

        self.assertEqual(res.data["count"], 3)
        self.assertEqual(result_ids(res), [self.expensive.id])


class RoomCalendarApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = create_user(email="user@test.com", password="test12345")
        self.client.force_authenticate(self.user)
        self.room = create_room()
        self.url = room_calendar_url(room_id=self.room.id)

    def create_booking(self, check_in, check_out, booking_status=Booking.BookingStatus.CONFIRMED):
        return Booking.objects.create(
            room=self.room,
            hotel=self.room.hotel,
            user=self.user,
            status=booking_status,
            total_price=23600,
            check_in_date=check_in,
            check_out_date=check_out,
        )

    def test_get_calendar_success(self):
        check_in = date.today() + timedelta(days=2)
        check_out = check_in + timedelta(days=2)
        self.create_booking(check_in, check_out)

        date_from = date.today()
        date_to = date.today() + timedelta(days=4)

        res = self.client.get(self.url, {"date_from": date_from, "date_to": date_to})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 5)
        for day_data in res.data:
            day = date.fromisoformat(day_data["date"])
            if check_in <= day < check_out:
                self.assertFalse(day_data["available"])
            else:
                self.assertTrue(day_data["available"])

    def test_cancelled_booking_frees_calendar(self):
        check_in = date.today() + timedelta(days=1)
        self.create_booking(
            check_in,
            check_in + timedelta(days=2),
            booking_status=Booking.BookingStatus.CANCELLED,
        )

        res = self.client.get(
            self.url,
            {"date_from": date.today(), "date_to": date.today() + timedelta(days=3)},
        )

        self.assertTrue(all(day["available"] for day in res.data))

    def test_calendar_missing_dates_returns_400(self):
        res = self.client.get(self.url, {"date_from": date.today()})
        self.assertEqual(res.status_code, 400)
        self.assertIn("detail", res.data)

        res = self.client.get(self.url, {"date_to": date.today()})
        self.assertEqual(res.status_code, 400)
        self.assertIn("detail", res.data)

    def test_calendar_invalid_date_format_returns_400(self):
        res = self.client.get(self.url, {"date_from": "2025-13-40", "date_to": "soon"})

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_calendar_last_representable_day(self):
        res = self.client.get(
            self.url, {"date_from": "9999-12-31", "date_to": "9999-12-31"}
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, [{"date": "9999-12-31", "available": True}])

    def test_calendar_range_too_long_returns_400(self):
        res = self.client.get(
            self.url, {"date_from": "0001-01-01", "date_to": "9999-12-30"}
        )

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("366", res.data["detail"])

    def test_calendar_full_year_allowed(self):
        date_from = date.today()

        res = self.client.get(
            self.url,
            {"date_from": date_from, "date_to": date_from + timedelta(days=365)},
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 366)

    def test_booking_starting_after_range_is_ignored(self):
        date_from = date.today()
        self.create_booking(date_from + timedelta(days=3), date_from + timedelta(days=5))

        res = self.client.get(
            self.url, {"date_from": date_from, "date_to": date_from + timedelta(days=2)}
        )

        self.assertTrue(all(day["available"] for day in res.data))

    def test_calendar_invalid_date_range_returns_400(self):
        date_from = date.today()
        date_to = date.today() - timedelta(days=1)
        res = self.client.get(self.url, {"date_from": date_from, "date_to": date_to})
        self.assertEqual(res.status_code, 400)
        self.assertIn("detail", res.data)


class PublicRoomCalendarApiTests(APITestCase):
    def setUp(self):
        self.client = APIClient()
        self.room = create_room()
        self.url = room_calendar_url(room_id=self.room.id)

    def test_get_calendar_success_for_anonymous(self):
        date_from = date.today()
        date_to = date.today() + timedelta(days=2)

        res = self.client.get(self.url, {"date_from": date_from, "date_to": date_to})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 3)

        for day_data in res.data:
            self.assertIn("date", day_data)
            self.assertIn("available", day_data)


class RoomCapacityExpressionTests(APITestCase):
    def test_expression_matches_python_rule(self):
        hotel = create_hotel()
        rooms = [
            create_room(hotel=hotel, room_type="Single Room"),
            create_room(hotel=hotel, room_type="DOUBLE BED"),
            create_room(hotel=hotel, room_type="Family Beach Room"),
            create_room(hotel=hotel, room_type="Executive Suite"),
            create_room(hotel=hotel, room_type="Single Room", capacity=3),
        ]

        annotated = dict(
            Room.objects.annotate(max_guests=room_capacity_expression())
            .values_list("id", "max_guests")
        )

        self.assertEqual(
            [annotated[room.id] for room in rooms],
            [room_capacity(room) for room in rooms],
        )
        self.assertEqual([annotated[room.id] for room in rooms], [1, 2, 4, 2, 3])
