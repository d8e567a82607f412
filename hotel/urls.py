from rest_framework.routers import DefaultRouter

from hotel.views import HotelViewSet

app_name = "hotel"

router = DefaultRouter()
router.register("hotels", HotelViewSet, basename="hotels")

urlpatterns = router.urls
