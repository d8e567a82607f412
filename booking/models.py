from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import ForeignKey

from hotel.models import Hotel
from room.models import Room


class BookingQuerySet(models.QuerySet):
    def active(self):
        """Bookings that still hold their room."""
        return self.exclude(status=Booking.BookingStatus.CANCELLED)

    def overlapping(self, check_in, check_out):
        """Bookings whose [check_in_date, check_out_date) meets [check_in, check_out)."""
        return self.filter(check_in_date__lt=check_out, check_out_date__gt=check_in)


class Booking(models.Model):
    class BookingStatus(models.TextChoices):
        PENDING = "pending"
        CONFIRMED = "confirmed"
        CANCELLED = "cancelled"

    user = ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE,
                      related_name="bookings")
    room = ForeignKey(Room, on_delete=models.CASCADE, related_name="bookings")
    hotel = ForeignKey(Hotel, on_delete=models.CASCADE, related_name="bookings")
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    total_price = models.PositiveIntegerField()
    guests = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    status = models.CharField(
        choices=BookingStatus, max_length=20, default=BookingStatus.PENDING
    )
    payment_method = models.CharField(max_length=50, default="Pay At Hotel")
    is_paid = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self):
        return f"Booking #{self.id} ({self.status})"

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days
