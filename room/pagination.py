from rest_framework.pagination import PageNumberPagination


class RoomPagination(PageNumberPagination):
    page_size = 12
    page_size_query_param = "limit"
    max_page_size = 100
