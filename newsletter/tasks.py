import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


@shared_task(bind=True, autoretry_for=(Exception,), retry_kwargs={"max_retries": 3, "countdown": 10})
def send_subscription_email(self, email: str):
    """
    Send the newsletter welcome email to a new subscriber
    """
    html_message = render_to_string(
        "newsletter/welcome_email.html", {"email": email}
    )

    send_mail(
        subject="Welcome to Luxor Stays Newsletter!",
        message=strip_tags(html_message),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[email],
        html_message=html_message,
    )
    logger.info(f"Sent newsletter welcome email to {email}")
