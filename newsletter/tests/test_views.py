from unittest.mock import patch

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from newsletter.models import NewsletterSubscriber

SUBSCRIBE_URL = reverse("newsletter:subscribe")
UNSUBSCRIBE_URL = reverse("newsletter:unsubscribe")


@patch("newsletter.views.send_subscription_email")
class SubscribeViewTests(APITestCase):
    def test_subscribe_new_email(self, mock_task):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(SUBSCRIBE_URL, {"email": "Guest@Example.com"})

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        subscriber = NewsletterSubscriber.objects.get()
        self.assertEqual(subscriber.email, "guest@example.com")
        self.assertTrue(subscriber.is_active)
        mock_task.delay.assert_called_once_with("guest@example.com")

    def test_subscribe_twice_does_not_resend(self, mock_task):
        NewsletterSubscriber.objects.create(email="guest@example.com")

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(SUBSCRIBE_URL, {"email": "guest@example.com"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(NewsletterSubscriber.objects.count(), 1)
        mock_task.delay.assert_not_called()

    def test_resubscribe_reactivates(self, mock_task):
        NewsletterSubscriber.objects.create(email="guest@example.com", is_active=False)

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(SUBSCRIBE_URL, {"email": "guest@example.com"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(NewsletterSubscriber.objects.get().is_active)
        mock_task.delay.assert_called_once_with("guest@example.com")

    def test_invalid_email(self, mock_task):
        response = self.client.post(SUBSCRIBE_URL, {"email": "not-an-email"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(NewsletterSubscriber.objects.exists())
        mock_task.delay.assert_not_called()


class UnsubscribeViewTests(APITestCase):
    def test_unsubscribe(self):
        NewsletterSubscriber.objects.create(email="guest@example.com")

        response = self.client.post(UNSUBSCRIBE_URL, {"email": "GUEST@example.com"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(NewsletterSubscriber.objects.get().is_active)

    def test_unsubscribe_unknown_email(self):
        response = self.client.post(UNSUBSCRIBE_URL, {"email": "nobody@example.com"})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
