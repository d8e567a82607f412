import django_filters

from hotel.models import Hotel


class HotelFilter(django_filters.FilterSet):
    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")

    class Meta:
        model = Hotel
        fields = ["city", "owner"]
