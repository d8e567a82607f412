import logging

from django.db import transaction
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from newsletter.models import NewsletterSubscriber
from newsletter.serializers import (
    NewsletterSubscriberSerializer,
    SubscribeSerializer,
)
from newsletter.tasks import send_subscription_email

logger = logging.getLogger(__name__)


class SubscribeView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="Subscribe to the newsletter",
        request=SubscribeSerializer,
        responses={
            201: NewsletterSubscriberSerializer,
            200: NewsletterSubscriberSerializer,
            400: OpenApiResponse(description="Invalid email"),
        },
    )
    def post(self, request):
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]

        subscriber, created = NewsletterSubscriber.objects.get_or_create(email=email)
        if not created and subscriber.is_active:
            return Response(
                NewsletterSubscriberSerializer(subscriber).data,
                status=status.HTTP_200_OK,
            )

        if not subscriber.is_active:
            subscriber.is_active = True
            subscriber.save(update_fields=["is_active"])

        transaction.on_commit(lambda: send_subscription_email.delay(email))
        logger.info(f"Newsletter subscription for {email}")

        return Response(
            NewsletterSubscriberSerializer(subscriber).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class UnsubscribeView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="Unsubscribe from the newsletter",
        request=SubscribeSerializer,
        responses={
            200: NewsletterSubscriberSerializer,
            404: OpenApiResponse(description="Email is not subscribed"),
        },
    )
    def post(self, request):
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            subscriber = NewsletterSubscriber.objects.get(
                email=serializer.validated_data["email"]
            )
        except NewsletterSubscriber.DoesNotExist:
            return Response(
                {"detail": "Email is not subscribed"},
                status=status.HTTP_404_NOT_FOUND,
            )

        subscriber.is_active = False
        subscriber.save(update_fields=["is_active"])
        return Response(NewsletterSubscriberSerializer(subscriber).data)
