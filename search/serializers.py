from rest_framework import serializers

from hotel.serializers import HotelSummarySerializer
from room.filters import RoomSort
from search.services import MAX_PAGE_SIZE, SearchCriteria


class SearchCriteriaSerializer(serializers.Serializer):
    destination = serializers.CharField(max_length=100)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests = serializers.IntegerField(min_value=1)
    sort = serializers.ChoiceField(choices=RoomSort.choices, required=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(
        min_value=1, max_value=MAX_PAGE_SIZE, required=False
    )

    def validate(self, attrs):
        if attrs["check_in"] >= attrs["check_out"]:
            raise serializers.ValidationError(
                {"check_out": "Check-out must be after check-in."}
            )
        return attrs

    def to_criteria(self) -> SearchCriteria:
        return SearchCriteria(**self.validated_data)


class AvailableRoomSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="room.id")
    room_type = serializers.CharField(source="room.room_type")
    price_per_night = serializers.CharField(source="room.price_per_night")
    capacity = serializers.IntegerField()
    bed_type = serializers.CharField(source="room.bed_type")
    description = serializers.CharField(source="room.description")
    amenities = serializers.ListField(child=serializers.CharField(), source="room.amenities")
    images = serializers.ListField(child=serializers.CharField(), source="room.images")
    is_available = serializers.BooleanField(source="room.is_available")
    hotel = HotelSummarySerializer()


class SearchResultSerializer(serializers.Serializer):
    status = serializers.CharField(source="status.value")
    message = serializers.CharField(allow_null=True)
    results = AvailableRoomSerializer(many=True)
    total_results = serializers.IntegerField()
