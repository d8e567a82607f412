from rest_framework import serializers

from hotel.serializers import HotelSerializer, HotelSummarySerializer
from room.capacity import room_capacity
from room.models import Room
from room.pricing import format_price, parse_price

SIMILAR_ROOMS_LIMIT = 4


class RoomSerializer(serializers.ModelSerializer):
    price_per_night = serializers.CharField(max_length=32)
    max_guests = serializers.SerializerMethodField()
    hotel_summary = HotelSummarySerializer(source="hotel", read_only=True)

    class Meta:
        model = Room
        fields = (
            "id",
            "hotel",
            "hotel_summary",
            "room_type",
            "price_per_night",
            "capacity",
            "max_guests",
            "bed_type",
            "description",
            "amenities",
            "images",
            "is_available",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("created_at", "updated_at")

    def get_max_guests(self, obj) -> int:
        return room_capacity(obj)

    def validate_price_per_night(self, value):
        try:
            return format_price(parse_price(value))
        except ValueError:
            raise serializers.ValidationError(
                "Enter a whole amount, e.g. 11800 or 11,800."
            )

    def validate_hotel(self, hotel):
        request = self.context.get("request")
        if request is None or request.user.is_administrator:
            return hotel
        if hotel.owner_id != request.user.id:
            raise serializers.ValidationError("You can only add rooms to your own hotels.")
        return hotel

    def validate_amenities(self, value):
        if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
            raise serializers.ValidationError("Amenities must be a list of strings.")
        return value

    def validate_images(self, value):
        if not isinstance(value, list) or not all(isinstance(i, str) for i in value):
            raise serializers.ValidationError("Images must be a list of strings.")
        return value


class SimilarRoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ("id", "room_type", "price_per_night", "images")


class RoomDetailSerializer(RoomSerializer):
    hotel_detail = HotelSerializer(source="hotel", read_only=True)
    similar_rooms = serializers.SerializerMethodField()

    class Meta(RoomSerializer.Meta):
        fields = RoomSerializer.Meta.fields + ("hotel_detail", "similar_rooms")

    def get_similar_rooms(self, obj) -> list:
        rooms = (
            Room.objects.filter(hotel_id=obj.hotel_id)
            .exclude(pk=obj.pk)
            .order_by("id")[:SIMILAR_ROOMS_LIMIT]
        )
        return SimilarRoomSerializer(rooms, many=True).data


class RoomCalendarSerializer(serializers.Serializer):
    date = serializers.DateField()
    available = serializers.BooleanField()
