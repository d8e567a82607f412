import logging

from django.apps import apps
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from search.exceptions import InvalidSearchCriteria, StorageError
from search.serializers import SearchCriteriaSerializer, SearchResultSerializer

logger = logging.getLogger(__name__)


def get_availability_search():
    return apps.get_app_config("search").availability_search


class SearchView(APIView):
    authentication_classes = ()
    permission_classes = (AllowAny,)

    @extend_schema(
        summary="Search available rooms",
        description=(
                "Rooms in hotels whose city contains `destination` that have no "
                "pending or confirmed booking overlapping [check_in, check_out) "
                "and sleep at least `guests` people.\n\n"
                "An unknown destination is not an error: the response has an "
                "empty `results` list and status `no_hotels`."
        ),
        parameters=[SearchCriteriaSerializer],
        responses={
            200: SearchResultSerializer,
            400: OpenApiResponse(description="Missing or malformed search parameters"),
            500: OpenApiResponse(description="Error searching for rooms"),
        },
    )
    def get(self, request):
        criteria_serializer = SearchCriteriaSerializer(data=request.query_params)
        criteria_serializer.is_valid(raise_exception=True)
        criteria = criteria_serializer.to_criteria()

        try:
            result = get_availability_search().search(criteria)
        except InvalidSearchCriteria as exc:
            raise ValidationError(exc.errors)
        except StorageError:
            logger.exception(f"Search failed for {criteria}")
            return Response(
                {"detail": "Error searching for rooms"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        data = SearchResultSerializer(result).data
        data["search_parameters"] = criteria_serializer.data
        return Response(data, status=status.HTTP_200_OK)
