from django.contrib import admin

from booking.models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "hotel",
        "user",
        "check_in_date",
        "check_out_date",
        "guests",
        "status",
        "total_price",
        "is_paid",
    )

    list_filter = (
        "status",
        "is_paid",
        "check_in_date",
        "check_out_date",
        "hotel",
    )

    search_fields = (
        "user__email",
        "hotel__name",
        "room__room_type",
    )

    ordering = ("-check_in_date",)
