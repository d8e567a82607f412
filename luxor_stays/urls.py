from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/user/", include(("account.urls", "account"), namespace="account")),
    path("api/", include(("hotel.urls", "hotel"), namespace="hotel")),
    path("api/", include(("room.urls", "room"), namespace="room")),
    path("api/", include("booking.urls", namespace="booking")),
    path("api/", include(("search.urls", "search"), namespace="search")),
    path(
        "api/newsletter/",
        include(("newsletter.urls", "newsletter"), namespace="newsletter"),
    ),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]

if settings.DEBUG:
    urlpatterns.append(path("__debug__/", include("debug_toolbar.urls")))
