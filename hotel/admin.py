from django.contrib import admin

from hotel.models import Hotel


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "city", "contact", "owner", "rating")
    search_fields = ("name", "city", "address")
    list_filter = ("city",)
