from django.core.validators import MinValueValidator
from django.db import models

from hotel.models import Hotel
from room.pricing import parse_price


class Room(models.Model):
    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="rooms")
    room_type = models.CharField(max_length=100)
    price_per_night = models.CharField(max_length=32)
    price_amount = models.PositiveIntegerField(default=0, editable=False, db_index=True)
    capacity = models.PositiveIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1)]
    )
    bed_type = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("id",)

    def __str__(self):
        return f"{self.room_type} at {self.hotel_id}"

    def save(self, *args, **kwargs):
        self.price_amount = parse_price(self.price_per_night)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "price_per_night" in update_fields:
            kwargs["update_fields"] = {*update_fields, "price_amount"}
        super().save(*args, **kwargs)
