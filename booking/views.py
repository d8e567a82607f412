import logging

from django.db.models import Q, Sum
from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    OpenApiTypes,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.authentication import JWTAuthentication

from booking.filters import BookingFilter
from booking.models import Booking
from booking.serializers import BookingCreateSerializer, BookingReadSerializer

logger = logging.getLogger(__name__)


class BookingViewSet(viewsets.ModelViewSet):
    serializer_class = BookingReadSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = [IsAuthenticated]
    filterset_class = BookingFilter
    http_method_names = ["get", "post", "head", "options"]

    def get_queryset(self):
        queryset = Booking.objects.select_related("room", "hotel", "user")

        if self.request.user.is_administrator:
            return queryset

        return queryset.filter(
            Q(user=self.request.user) | Q(hotel__owner=self.request.user)
        )

    def get_serializer_class(self):
        if self.action == "create":
            return BookingCreateSerializer
        return BookingReadSerializer

    def create(self, request, *args, **kwargs):
        """Create a pending booking for the current user; price comes from the room."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = serializer.save()

        response_serializer = BookingReadSerializer(booking)
        return Response(response_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List bookings",
        description=(
            "Retrieve a list of bookings.\n\n"
            "- Guests see their own bookings.\n"
            "- Hotel owners also see bookings made at their hotels.\n"
            "- Administrators see all bookings.\n"
            "- Supports filtering by user, room, hotel, status, date range and room type."
        ),
        parameters=[
            OpenApiParameter(
                name="status",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Booking status (pending, confirmed, cancelled)",
                required=False,
            ),
            OpenApiParameter(
                name="from_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-in date from this date",
                required=False,
            ),
            OpenApiParameter(
                name="to_date",
                type=OpenApiTypes.DATE,
                location=OpenApiParameter.QUERY,
                description="Filter bookings with check-out date to this date",
                required=False,
            ),
            OpenApiParameter(
                name="room_type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Filter by room type label, case-insensitive",
                required=False,
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        booking = self.get_object()

        if booking.user_id != request.user.id and not request.user.is_administrator:
            return Response(
                {"detail": "You can only cancel your own bookings."},
                status=status.HTTP_403_FORBIDDEN,
            )

        if booking.status == Booking.BookingStatus.CANCELLED:
            return Response(
                {"detail": "Booking is already cancelled."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        booking.status = Booking.BookingStatus.CANCELLED
        booking.save(update_fields=["status", "updated_at"])
        logger.info(f"Booking {booking.id} cancelled by user {request.user.id}")

        return Response(
            BookingReadSerializer(booking).data,
            status=status.HTTP_200_OK,
        )

    @extend_schema(request=None, responses={200: BookingReadSerializer})
    @action(detail=True, methods=["post"], url_path="confirm")
    def confirm(self, request, pk=None):
        booking = self.get_object()

        if not (
            request.user.is_administrator
            or booking.hotel.owner_id == request.user.id
        ):
            return Response(
                {"detail": "Only the hotel owner can confirm bookings."},
                status=status.HTTP_403_FORBIDDEN,
            )

        if booking.status != Booking.BookingStatus.PENDING:
            return Response(
                {"detail": "Only pending bookings can be confirmed."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        booking.status = Booking.BookingStatus.CONFIRMED
        booking.save(update_fields=["status", "updated_at"])
        logger.info(f"Booking {booking.id} confirmed by user {request.user.id}")

        return Response(
            BookingReadSerializer(booking).data,
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        summary="Hotel owner dashboard",
        responses={
            200: OpenApiResponse(
                description="total_bookings, total_revenue and the bookings "
                            "made at the owner's hotels"
            ),
            403: OpenApiResponse(description="Only hotel owners have a dashboard"),
        },
    )
    @action(detail=False, methods=["get"], url_path="dashboard", filter_backends=[])
    def dashboard(self, request):
        if not (request.user.is_hotel_owner or request.user.is_administrator):
            return Response(
                {"detail": "Only hotel owners have a dashboard."},
                status=status.HTTP_403_FORBIDDEN,
            )

        bookings = Booking.objects.select_related("room", "hotel", "user").filter(
            hotel__owner=request.user
        )
        revenue = bookings.active().aggregate(total=Sum("total_price"))["total"]

        return Response(
            {
                "total_bookings": bookings.count(),
                "total_revenue": revenue or 0,
                "bookings": BookingReadSerializer(bookings, many=True).data,
            }
        )
