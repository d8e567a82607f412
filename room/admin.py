from django.contrib import admin

from room.models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "hotel", "room_type", "capacity", "price_per_night", "is_available")
    search_fields = ("room_type", "hotel__name", "hotel__city")
    list_filter = ("is_available", "hotel__city")
