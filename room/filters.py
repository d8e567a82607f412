import django_filters
from django.db import models
from rest_framework.exceptions import ValidationError

from room.capacity import room_capacity_expression
from room.models import Room
from room.pricing import parse_price


class RoomSort(models.TextChoices):
    PRICE_ASC = "price_asc", "Price low to high"
    PRICE_DESC = "price_desc", "Price high to low"
    RATING = "rating", "Hotel rating"
    NEWEST = "newest", "Newest first"


ROOM_ORDERING = {
    RoomSort.PRICE_ASC: ("price_amount", "id"),
    RoomSort.PRICE_DESC: ("-price_amount", "id"),
    RoomSort.RATING: (models.F("hotel__rating").desc(nulls_last=True), "id"),
    RoomSort.NEWEST: ("-created_at", "id"),
}


class RoomFilter(django_filters.FilterSet):
    room_type = django_filters.CharFilter(field_name="room_type", lookup_expr="iexact")
    location = django_filters.CharFilter(field_name="hotel__city", lookup_expr="icontains")
    amenities = django_filters.CharFilter(method="filter_amenities")
    min_price = django_filters.CharFilter(method="filter_min_price")
    max_price = django_filters.CharFilter(method="filter_max_price")
    min_capacity = django_filters.NumberFilter(method="filter_min_capacity")
    sort_by = django_filters.ChoiceFilter(choices=RoomSort.choices, method="sort_rooms")

    class Meta:
        model = Room
        fields = ["hotel", "room_type", "is_available"]

    @property
    def qs(self):
        queryset = super().qs
        if not getattr(self.form, "cleaned_data", {}).get("sort_by"):
            queryset = queryset.order_by(*ROOM_ORDERING[RoomSort.NEWEST])
        return queryset

    def filter_amenities(self, queryset, name, value):
        wanted = [a.strip() for a in value.split(",") if a.strip()]
        if not wanted:
            return queryset
        # JSON containment is not available on every backend, so match in Python.
        ids = [
            room_id
            for room_id, amenities in queryset.values_list("id", "amenities")
            if set(wanted).issubset(amenities or [])
        ]
        return queryset.filter(id__in=ids)

    def filter_min_capacity(self, queryset, name, value):
        return queryset.alias(max_guests=room_capacity_expression()).filter(
            max_guests__gte=value
        )

    def _price(self, name, value):
        try:
            return parse_price(value)
        except ValueError:
            raise ValidationError({name: ["Enter a whole amount, e.g. 11800 or 11,800."]})

    def filter_min_price(self, queryset, name, value):
        return queryset.filter(price_amount__gte=self._price(name, value))

    def filter_max_price(self, queryset, name, value):
        return queryset.filter(price_amount__lte=self._price(name, value))

    def sort_rooms(self, queryset, name, value):
        return queryset.order_by(*ROOM_ORDERING[RoomSort(value)])
