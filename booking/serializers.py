import logging

from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from booking.models import Booking
from hotel.serializers import HotelSummarySerializer
from room.capacity import room_capacity
from room.models import Room
from room.pricing import parse_price

logger = logging.getLogger(__name__)

ROOM_UNAVAILABLE = "Room is not available for selected dates."


class BookingRoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ("id", "room_type", "price_per_night", "images", "amenities")


class BookingReadSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source="user.email", read_only=True)
    room_detail = BookingRoomSerializer(source="room", read_only=True)
    hotel_detail = HotelSummarySerializer(source="hotel", read_only=True)
    total_nights = serializers.IntegerField(source="nights", read_only=True)

    class Meta:
        model = Booking
        fields = (
            "id",
            "user",
            "user_email",
            "room",
            "room_detail",
            "hotel",
            "hotel_detail",
            "check_in_date",
            "check_out_date",
            "total_nights",
            "total_price",
            "guests",
            "status",
            "payment_method",
            "is_paid",
            "created_at",
        )


class BookingCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating bookings with validation."""

    class Meta:
        model = Booking
        fields = (
            "room",
            "check_in_date",
            "check_out_date",
            "guests",
            "payment_method",
            "is_paid",
        )

    def validate_check_in_date(self, value):
        """Validate that check-in date is not in the past."""
        if value < timezone.localdate():
            raise serializers.ValidationError("Check-in date cannot be in the past.")
        return value

    def validate(self, attrs):
        check_in = attrs["check_in_date"]
        check_out = attrs["check_out_date"]
        room = attrs["room"]
        guests = attrs.get("guests", 1)

        if check_out <= check_in:
            raise serializers.ValidationError(
                "Check-out date must be after check-in date."
            )

        if guests > room_capacity(room):
            raise serializers.ValidationError(
                {"guests": f"This room sleeps at most {room_capacity(room)} guests."}
            )

        if self._has_overlap(room, check_in, check_out):
            raise serializers.ValidationError(ROOM_UNAVAILABLE)

        return attrs

    @staticmethod
    def _has_overlap(room, check_in, check_out):
        return (
            Booking.objects.active()
            .overlapping(check_in, check_out)
            .filter(room=room)
            .exists()
        )

    def create(self, validated_data):
        user = self.context["request"].user

        with transaction.atomic():
            # Serialize concurrent bookings of the same room.
            room = Room.objects.select_for_update().get(pk=validated_data["room"].pk)
            check_in = validated_data["check_in_date"]
            check_out = validated_data["check_out_date"]
            if self._has_overlap(room, check_in, check_out):
                raise serializers.ValidationError(ROOM_UNAVAILABLE)

            nights = (check_out - check_in).days
            booking = Booking.objects.create(
                user=user,
                hotel_id=room.hotel_id,
                total_price=parse_price(room.price_per_night) * nights,
                status=Booking.BookingStatus.PENDING,
                **validated_data,
            )

        logger.info(f"Booking {booking.id} created for room {room.id} by user {user.id}")
        return booking
