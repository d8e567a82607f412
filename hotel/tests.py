from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from hotel.models import Hotel
from room.models import Room

HOTELS_URL = reverse("hotel:hotels-list")
CITIES_URL = reverse("hotel:hotels-cities")


def detail_url(hotel_id):
    return reverse("hotel:hotels-detail", args=[hotel_id])


def sample_hotel(**params):
    defaults = {
        "name": "Marina Bay Resort",
        "address": "Marina Beach Road",
        "city": "Chennai",
        "contact": "+91-44-28561234",
    }
    defaults.update(params)
    return Hotel.objects.create(**defaults)


class PublicHotelApiTests(APITestCase):
    def test_list_hotels(self):
        sample_hotel()
        sample_hotel(name="Heritage Mansion", city="Pondicherry")

        response = self.client.get(HOTELS_URL)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

    def test_filter_by_city_substring(self):
        sample_hotel()
        sample_hotel(name="Heritage Mansion", city="Pondicherry")

        response = self.client.get(HOTELS_URL, {"city": "pondi"})

        self.assertEqual([h["name"] for h in response.data], ["Heritage Mansion"])

    def test_cities_are_distinct_and_sorted(self):
        sample_hotel(city="Pondicherry")
        sample_hotel()
        sample_hotel(name="Sea Breeze Villa")

        response = self.client.get(CITIES_URL)

        self.assertEqual(response.data, ["Chennai", "Pondicherry"])

    def test_create_requires_authentication(self):
        response = self.client.post(HOTELS_URL, {"name": "X"})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class HotelOwnerApiTests(APITestCase):
    def setUp(self):
        self.owner = get_user_model().objects.create_user(
            email="owner@test.com",
            password="password123",
            role=get_user_model().Role.HOTEL_OWNER,
        )
        self.client.force_authenticate(self.owner)

    def test_guest_cannot_create_hotel(self):
        guest = get_user_model().objects.create_user(
            email="guest@test.com", password="password123"
        )
        self.client.force_authenticate(guest)

        response = self.client.post(HOTELS_URL, {
            "name": "Seaside Retreat",
            "address": "Promenade Beach",
            "city": "Pondicherry",
            "contact": "+91-413-2345678",
        })

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_owner_creates_hotel(self):
        payload = {
            "name": "Seaside Retreat",
            "address": "Promenade Beach",
            "city": " Pondicherry ",
            "contact": "+91-413-2345678",
            "rating": 4.8,
        }

        response = self.client.post(HOTELS_URL, payload)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        hotel = Hotel.objects.get(id=response.data["id"])
        self.assertEqual(hotel.owner, self.owner)
        self.assertEqual(hotel.city, "Pondicherry")
        self.assertEqual(response.data["owner_email"], self.owner.email)

    def test_rating_above_five_rejected(self):
        response = self.client.post(HOTELS_URL, {
            "name": "Seaside Retreat",
            "address": "Promenade Beach",
            "city": "Pondicherry",
            "contact": "1",
            "rating": 7,
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("rating", response.data)

    def test_owner_updates_own_hotel(self):
        hotel = sample_hotel(owner=self.owner)

        response = self.client.patch(detail_url(hotel.id), {"description": "Sea views"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        hotel.refresh_from_db()
        self.assertEqual(hotel.description, "Sea views")

    def test_owner_cannot_update_foreign_hotel(self):
        hotel = sample_hotel()

        response = self.client.patch(detail_url(hotel.id), {"description": "Mine"})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_deletes_any_hotel(self):
        hotel = sample_hotel(owner=self.owner)
        admin = get_user_model().objects.create_superuser(
            email="admin@test.com", password="adminpass123"
        )
        self.client.force_authenticate(admin)

        response = self.client.delete(detail_url(hotel.id))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Hotel.objects.filter(id=hotel.id).exists())


class SeedHotelsCommandTests(TestCase):
    def test_seed_creates_hotels_and_rooms(self):
        call_command("seed_hotels", stdout=StringIO())

        self.assertEqual(Hotel.objects.count(), 5)
        self.assertEqual(
            set(Hotel.objects.values_list("city", flat=True)),
            {"Chennai", "Pondicherry"},
        )
        room = Room.objects.get(room_type="Double Bed")
        self.assertEqual(room.price_amount, 11800)
        self.assertIsNone(room.capacity)

    def test_seed_twice_without_reset_is_noop(self):
        call_command("seed_hotels", stdout=StringIO())
        out = StringIO()

        call_command("seed_hotels", stdout=out)

        self.assertEqual(Hotel.objects.count(), 5)
        self.assertIn("already exist", out.getvalue())

    def test_seed_with_reset_recreates(self):
        call_command("seed_hotels", stdout=StringIO())

        call_command("seed_hotels", "--reset", stdout=StringIO())

        self.assertEqual(Hotel.objects.count(), 5)
        self.assertEqual(Room.objects.count(), 10)
