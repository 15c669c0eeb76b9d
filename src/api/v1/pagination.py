"""Pagination for list endpoints of API v1."""

from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page numbers; back-office lists of leads and credits may ask for larger pages."""

    page_size = 25
    page_size_query_param = "page_size"
    max_page_size = 500


class ReportRowsPagination(PageNumberPagination):
    """Stored commission statements; one row per month."""

    page_size = 12
    page_size_query_param = "page_size"
    max_page_size = 120
