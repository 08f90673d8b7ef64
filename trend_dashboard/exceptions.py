# trend_dashboard/exceptions.py
from fastapi import status


class DashboardError(Exception):
    """Base error; the app maps it to a JSON response with ``status_code``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class StoreUnavailable(DashboardError):
    """The query store could not be reached or the query failed."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class BadRequest(DashboardError):
    """A caller-supplied filter value is out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
