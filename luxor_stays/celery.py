import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "luxor_stays.settings")

app = Celery("luxor_stays")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
