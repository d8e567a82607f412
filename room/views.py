from datetime import timedelta

from django.utils.dateparse import parse_date
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.viewsets import ModelViewSet

from booking.models import Booking
from hotel.permissions import IsHotelOwnerOrReadOnly
from room.filters import RoomFilter
from room.models import Room
from room.pagination import RoomPagination
from room.serializers import (
    RoomCalendarSerializer,
    RoomDetailSerializer,
    RoomSerializer,
)


MAX_CALENDAR_DAYS = 366


class RoomViewSet(ModelViewSet):
    queryset = Room.objects.select_related("hotel", "hotel__owner")
    serializer_class = RoomSerializer
    permission_classes = (IsHotelOwnerOrReadOnly,)
    filterset_class = RoomFilter
    pagination_class = RoomPagination

    def get_serializer_class(self):
        if self.action == "get_calendar":
            return RoomCalendarSerializer
        if self.action == "retrieve":
            return RoomDetailSerializer
        return RoomSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(
                name="sort_by",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="price_asc, price_desc, rating or newest (default)",
                required=False,
            ),
            OpenApiParameter(
                name="min_price",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Minimum nightly price, separators allowed (e.g. 5,000)",
                required=False,
            ),
            OpenApiParameter(
                name="max_price",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Maximum nightly price, separators allowed",
                required=False,
            ),
            OpenApiParameter(
                name="amenities",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Comma-separated amenities the room must all have",
                required=False,
            ),
            OpenApiParameter(
                name="location",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Part of the hotel city, case-insensitive",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=None,
        parameters=[
            OpenApiParameter(
                name="date_from",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="First day (YYYY-MM-DD)",
                required=True,
            ),
            OpenApiParameter(
                name="date_to",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Last day (YYYY-MM-DD)",
                required=True,
            ),
        ],
        responses={
            200: RoomCalendarSerializer(many=True),
            400: {
                "description": "Bad Request",
                "examples": [
                    {"detail": "date_from and date_to are required"},
                    {"detail": "date_from must be before date_to"},
                    {"detail": f"date range cannot exceed {MAX_CALENDAR_DAYS} days"},
                ],
            },
        },
        description=(
                "Get room availability calendar for a given date range.\n\n"
                "Every booking that is not cancelled occupies the nights from "
                "its check-in date up to (not including) its check-out date."
        ),
    )
    @action(
        methods=["GET"],
        detail=True,
        url_path="calendar",
        filter_backends=[],
        pagination_class=None,
    )
    def get_calendar(self, request, pk=None):
        room = self.get_object()

        date_from_str = request.query_params.get("date_from")
        date_to_str = request.query_params.get("date_to")

        if not date_from_str or not date_to_str:
            return Response(
                {"detail": "date_from and date_to are required"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            date_from = parse_date(date_from_str)
            date_to = parse_date(date_to_str)
        except ValueError:
            date_from = date_to = None

        if not date_from or not date_to:
            return Response(
                {"detail": "Invalid date format. Use YYYY-MM-DD."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if date_from > date_to:
            return Response(
                {"detail": "date_from must be before date_to"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        days = (date_to - date_from).days + 1
        if days > MAX_CALENDAR_DAYS:
            return Response(
                {"detail": f"date range cannot exceed {MAX_CALENDAR_DAYS} days"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        # Same as overlapping(date_from, date_to + 1 day), without leaving the date range.
        bookings = list(
            Booking.objects.active()
            .filter(room=room, check_in_date__lte=date_to, check_out_date__gt=date_from)
            .values_list("check_in_date", "check_out_date")
        )

        calendar = []
        for offset in range(days):
            day = date_from + timedelta(days=offset)
            calendar.append({
                "date": day,
                "available": not any(
                    check_in <= day < check_out for check_in, check_out in bookings
                ),
            })

        serializer = RoomCalendarSerializer(calendar, many=True)
        return Response(serializer.data)
