from datetime import timedelta
from unittest.mock import patch

from django.test import TestCase
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from booking.models import Booking
from booking.serializers import BookingCreateSerializer
from booking.tests.helpers import create_booking, create_hotel, create_room, create_user


class BookingCreateSerializerTest(TestCase):
    def setUp(self):
        self.user = create_user()
        self.hotel = create_hotel()
        self.room = create_room(self.hotel)
        self.today = timezone.localdate()
        self.context = {"request": type("obj", (), {"user": self.user})()}

    def make_serializer(self, **data):
        payload = {
            "room": self.room.id,
            "check_in_date": self.today + timedelta(days=1),
            "check_out_date": self.today + timedelta(days=3),
        }
        payload.update(data)
        return BookingCreateSerializer(data=payload, context=self.context)

    def test_check_in_date_in_past_fails(self):
        serializer = self.make_serializer(
            check_in_date=self.today - timedelta(days=1),
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("check_in_date", serializer.errors)

    def test_check_out_before_check_in_fails(self):
        serializer = self.make_serializer(
            check_in_date=self.today + timedelta(days=2),
            check_out_date=self.today + timedelta(days=1),
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("non_field_errors", serializer.errors)

    def test_zero_night_stay_fails(self):
        serializer = self.make_serializer(
            check_in_date=self.today + timedelta(days=2),
            check_out_date=self.today + timedelta(days=2),
        )

        self.assertFalse(serializer.is_valid())

    def test_too_many_guests_fails(self):
        serializer = self.make_serializer(guests=3)

        self.assertFalse(serializer.is_valid())
        self.assertIn("guests", serializer.errors)

    def test_explicit_capacity_allows_more_guests(self):
        self.room.capacity = 4
        self.room.save()

        serializer = self.make_serializer(guests=4)

        self.assertTrue(serializer.is_valid(), serializer.errors)

    def test_booking_overlap_fails(self):
        create_booking(self.room, self.user, offset_days=5, nights=2)

        serializer = self.make_serializer(
            check_in_date=self.today + timedelta(days=6),
            check_out_date=self.today + timedelta(days=8),
        )

        self.assertFalse(serializer.is_valid())
        self.assertIn("Room is not available", str(serializer.errors))

    def test_back_to_back_booking_allowed(self):
        create_booking(self.room, self.user, offset_days=5, nights=2)

        serializer = self.make_serializer(
            check_in_date=self.today + timedelta(days=7),
            check_out_date=self.today + timedelta(days=9),
        )

        self.assertTrue(serializer.is_valid(), serializer.errors)

    def test_cancelled_booking_does_not_block(self):
        create_booking(
            self.room,
            self.user,
            offset_days=1,
            nights=2,
            status=Booking.BookingStatus.CANCELLED,
        )

        serializer = self.make_serializer()

        self.assertTrue(serializer.is_valid(), serializer.errors)

    def test_overlap_rechecked_at_write_time(self):
        serializer = self.make_serializer()
        self.assertTrue(serializer.is_valid())

        # Another booking lands between validation and save.
        create_booking(self.room, create_user("other@test.com"), offset_days=1, nights=2)

        with self.assertRaises(ValidationError):
            serializer.save()
        self.assertEqual(Booking.objects.filter(user=self.user).count(), 0)

    def test_valid_booking_creates_booking(self):
        serializer = self.make_serializer(guests=2, payment_method="Card")

        self.assertTrue(serializer.is_valid(), serializer.errors)
        with patch("booking.serializers.logger") as mock_logger:
            booking = serializer.save()

        self.assertEqual(booking.user, self.user)
        self.assertEqual(booking.hotel, self.hotel)
        self.assertEqual(booking.total_price, 23600)
        self.assertEqual(booking.guests, 2)
        self.assertEqual(booking.payment_method, "Card")
        self.assertFalse(booking.is_paid)
        self.assertEqual(booking.status, Booking.BookingStatus.PENDING)
        mock_logger.info.assert_called_once()
