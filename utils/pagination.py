"""
Pagination classes for FacilityHub list endpoints.
"""

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class StandardResultsSetPagination(PageNumberPagination):
    """
    Standard pagination for list endpoints.

    Page size can be overridden with the ``page_size`` query parameter up to
    ``MAX_PAGE_SIZE``.
    """

    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = "page_size"
    max_page_size = MAX_PAGE_SIZE

    def get_paginated_response(self, data):
        return Response(
            {
                "count": self.page.paginator.count,
                "total_pages": self.page.paginator.num_pages,
                "current_page": self.page.number,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            }
        )
