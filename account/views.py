import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.tokens import RefreshToken

from account.serializers import (
    ClerkSyncSerializer,
    RecentCitySerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


@extend_schema(
    summary="User registration",
    description=(
            "Creates a new user account.\n\n"
            "This endpoint is public and does not require authentication."
    ),
    request=UserSerializer,
    responses={
        201: UserSerializer,
        400: OpenApiResponse(description="Validation error"),
    },
)
class CreateUserView(generics.CreateAPIView):
    serializer_class = UserSerializer
    authentication_classes = ()
    permission_classes = (AllowAny,)


@extend_schema(
    summary="Retrieve or update current user",
    description=(
            "Returns or updates the authenticated user's profile.\n\n"
            "Authentication: JWT required."
    ),
    responses={
        200: UserSerializer,
        401: OpenApiResponse(
            description="Authentication credentials were not provided"),
    },
)
class ManageUserView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get_object(self):
        return self.request.user


@extend_schema(
    summary="Sync a user from the external identity provider",
    description=(
            "Finds the user by email (or creates one), stores the external "
            "identity key and returns a JWT pair."
    ),
    request=ClerkSyncSerializer,
    responses={
        200: OpenApiResponse(description="User synced, tokens issued"),
        400: OpenApiResponse(description="Email and clerkId are required"),
    },
)
class ClerkSyncView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)

    def post(self, request):
        serializer = ClerkSyncSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Synced user {user.email} from identity provider")

        refresh = RefreshToken.for_user(user)
        return Response(
            {
                "success": True,
                "refresh": str(refresh),
                "access": str(refresh.access_token),
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


class ClerkUserDetailView(generics.RetrieveAPIView):
    serializer_class = UserSerializer
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def get_object(self):
        user = get_object_or_404(
            get_user_model(), clerk_id=self.kwargs["clerk_id"]
        )
        if user != self.request.user and not self.request.user.is_administrator:
            self.permission_denied(
                self.request, message="You can only view your own profile."
            )
        return user


@extend_schema(
    summary="Remember a searched city",
    request=RecentCitySerializer,
    responses={200: UserSerializer},
)
class RecentCitiesView(APIView):
    authentication_classes = (JWTAuthentication,)
    permission_classes = (IsAuthenticated,)

    def post(self, request):
        serializer = RecentCitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        request.user.add_recent_search(serializer.validated_data["city"])
        return Response(UserSerializer(request.user).data)
