from http import HTTPStatus
from typing import Any

from crm_client.base.domain import ServerError

__all__ = ["ApiException"]


class ApiException(ServerError):
    """An unexpected response from the API (wrong content type, unexpected 404)."""

    def __init__(self, obj: Any, status: HTTPStatus):
        super().__init__(obj, status=status)

    def __str__(self):
        return f"{self.status}: {super().__str__()}"
