import json
from http import HTTPStatus

from crm_client.base.domain import Json
from crm_client.base.domain import ValueObject

__all__ = ["Response"]


class Response(ValueObject):
    status: HTTPStatus
    data: bytes
    content_type: str | None

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")

    def json_body(self) -> Json:
        return json.loads(self.data)
