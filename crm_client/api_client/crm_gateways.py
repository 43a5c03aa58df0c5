from typing import Any

from crm_client.base.domain import Json
from crm_client.base.infrastructure import CamelCaseMapper

from .api_gateway import ApiGateway

__all__ = ["ContactsGateway", "ActivitiesGateway", "ActivityMapper"]


class ContactsGateway(ApiGateway, path="contacts/{id}"):
    pass


class ActivityMapper(CamelCaseMapper):
    """The API populates 'userId' with the acting user (username and email)."""

    def to_internal(self, external: Any) -> Json:
        result = super().to_internal(external)
        user = result.pop("user_id", None)
        if isinstance(user, dict):
            result["user"] = user
        return result


class ActivitiesGateway(ApiGateway, path="activities/{id}"):
    mapper = ActivityMapper()
