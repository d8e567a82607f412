from datetime import timedelta

from django.contrib.auth import get_user_model
from django.utils import timezone

from booking.models import Booking
from hotel.models import Hotel
from room.models import Room


def create_hotel(**params):
    defaults = {
        "name": "Landmark Villa",
        "address": "Vadanemmeli, Nemmeli",
        "contact": "+91 9940047463",
        "city": "Chennai",
    }
    defaults.update(params)
    return Hotel.objects.create(**defaults)


def create_room(hotel, **params):
    defaults = {
        "room_type": "Double Bed",
        "price_per_night": "11,800",
    }
    defaults.update(params)
    return Room.objects.create(hotel=hotel, **defaults)


def create_booking(room, user, offset_days=5, nights=2, **params):
    today = timezone.localdate()
    defaults = {
        "check_in_date": today + timedelta(days=offset_days),
        "check_out_date": today + timedelta(days=offset_days + nights),
        "total_price": 11800 * nights,
        "status": Booking.BookingStatus.PENDING,
    }
    defaults.update(params)
    return Booking.objects.create(room=room, hotel=room.hotel, user=user, **defaults)


def create_user(email="user@test.com", **params):
    return get_user_model().objects.create_user(
        email=email, password="password123", **params
    )
