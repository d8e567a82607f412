from django.apps import AppConfig
from django.conf import settings


class SearchConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "search"

    def ready(self):
        from search.repositories import DjangoInventoryRepository
        from search.services import AvailabilitySearch

        self.availability_search = AvailabilitySearch(
            repository=DjangoInventoryRepository(),
            fallback_cities=tuple(settings.SEARCH_FALLBACK_CITIES),
        )
