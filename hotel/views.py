import logging

from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from hotel.filters import HotelFilter
from hotel.models import Hotel
from hotel.permissions import IsHotelOwnerOrReadOnly
from hotel.serializers import HotelSerializer

logger = logging.getLogger(__name__)


class HotelViewSet(ModelViewSet):
    queryset = Hotel.objects.select_related("owner").order_by("id")
    serializer_class = HotelSerializer
    permission_classes = (IsHotelOwnerOrReadOnly,)
    filterset_class = HotelFilter

    def perform_create(self, serializer):
        hotel = serializer.save(owner=self.request.user)
        logger.info(f"Hotel {hotel.id} created by user {self.request.user.id}")

    @extend_schema(
        summary="List cities with hotels",
        responses={200: serializers.ListSerializer(child=serializers.CharField())},
    )
    @action(methods=["GET"], detail=False, url_path="cities", filter_backends=[])
    def cities(self, request):
        cities = (
            Hotel.objects.order_by("city")
            .values_list("city", flat=True)
            .distinct()
        )
        return Response(list(cities))
