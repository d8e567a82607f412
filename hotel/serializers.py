from rest_framework import serializers

from hotel.models import Hotel


class HotelSerializer(serializers.ModelSerializer):
    owner_email = serializers.EmailField(source="owner.email", read_only=True, default=None)

    class Meta:
        model = Hotel
        fields = (
            "id",
            "name",
            "address",
            "city",
            "contact",
            "owner",
            "owner_email",
            "description",
            "main_image",
            "rating",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("owner", "created_at", "updated_at")

    def validate_city(self, value):
        return value.strip()


class HotelSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Hotel
        fields = ("id", "name", "address", "city", "contact")
