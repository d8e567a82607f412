from django.urls import path
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
    TokenVerifyView,
)

from account.views import (
    ClerkSyncView,
    ClerkUserDetailView,
    CreateUserView,
    ManageUserView,
    RecentCitiesView,
)

app_name = "account"

urlpatterns = [
    path("register/", CreateUserView.as_view(), name="create"),
    path("me/", ManageUserView.as_view(), name="manage"),
    path("me/recent-cities/", RecentCitiesView.as_view(), name="recent-cities"),
    path("token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("token/verify/", TokenVerifyView.as_view(), name="token_verify"),
    path("clerk-sync/", ClerkSyncView.as_view(), name="clerk-sync"),
    path("clerk/<str:clerk_id>/", ClerkUserDetailView.as_view(), name="clerk-detail"),
]
