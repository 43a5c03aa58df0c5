from http import HTTPStatus
from typing import Any
from typing import Optional

import inject

from crm_client.base.domain import DoesNotExist
from crm_client.base.domain import Filter
from crm_client.base.domain import Gateway
from crm_client.base.domain import Id
from crm_client.base.domain import Json
from crm_client.base.domain import Page
from crm_client.base.domain import PageOptions
from crm_client.base.infrastructure import CamelCaseMapper

from .api_provider import ApiProvider
from .exceptions import ApiException

__all__ = ["ApiGateway"]


def singular(name: str) -> str:
    if name.endswith("ies"):
        return name[:-3] + "y"
    elif name.endswith("s"):
        return name[:-1]
    return name


class ApiGateway(Gateway):
    """A collection resource of the CRM API.

    Subclasses declare the resource path, e.g. ``path="contacts/{id}"``. Listing
    returns ``{"contacts": [...], "totalContacts": 12}`` and single records are
    wrapped as ``{"contact": {...}}``; the keys are derived from the path and can be
    overridden with ``items_key``, ``total_key`` and ``item_key``.
    """

    path: str
    items_key: str
    total_key: str
    item_key: str
    mapper = CamelCaseMapper()

    def __init__(self, provider_override: Optional[ApiProvider] = None):
        self.provider_override = provider_override

    def __init_subclass__(
        cls,
        path: str,
        items_key: str | None = None,
        total_key: str | None = None,
        item_key: str | None = None,
    ) -> None:
        assert not path.startswith("/")
        assert "{id}" in path
        cls.path = path
        resource = path.split("/")[0]
        cls.items_key = items_key or resource
        cls.total_key = total_key or "total" + resource[:1].upper() + resource[1:]
        cls.item_key = item_key or singular(resource)
        super().__init_subclass__()

    @property
    def provider(self) -> ApiProvider:
        return self.provider_override or inject.instance(ApiProvider)

    def _to_internal(self, obj: Any) -> Json:
        if not isinstance(obj, dict):
            raise ApiException(
                f"Malformed {self.item_key} in response", status=HTTPStatus.OK
            )
        return self.mapper.to_internal(obj)

    def _unwrap(self, result: Json | None) -> Json:
        if result is None:
            raise ApiException("Empty response", status=HTTPStatus.NO_CONTENT)
        return self._to_internal(result.get(self.item_key, result))

    async def filter(
        self, filter: Filter, params: Optional[PageOptions] = None
    ) -> Page[Json]:
        query = filter.to_params()
        if params is not None:
            query = {"page": params.page, "limit": params.limit, **query}
        result = await self.provider.request(
            "GET",
            self.path.format(id=""),
            params=query,
            error_message=f"Failed to fetch {self.items_key}",
        )
        result = result or {}
        items = result.get(self.items_key) or []
        total = result.get(self.total_key) or 0
        if not isinstance(items, list) or not isinstance(total, int) or total < 0:
            raise ApiException(
                f"Malformed {self.items_key} in response", status=HTTPStatus.OK
            )
        return Page(
            total=total,
            items=[self._to_internal(x) for x in items],
            limit=params.limit if params else None,
            page=params.page if params else None,
        )

    async def add(self, item: Json) -> Json:
        result = await self.provider.request(
            "POST",
            self.path.format(id=""),
            json=self.mapper.to_external(item),
            error_message=f"Failed to create {self.item_key}",
        )
        return self._unwrap(result)

    async def update(self, item: Json) -> Json:
        id_ = item.get("id")
        if id_ is None:
            raise DoesNotExist("resource", id_)
        try:
            result = await self.provider.request(
                "PUT",
                self.path.format(id=id_),
                json=self.mapper.to_external(item),
                error_message=f"Failed to update {self.item_key}",
            )
        except ApiException as e:
            if e.status is HTTPStatus.NOT_FOUND:
                raise DoesNotExist("resource", id_)
            raise e
        return self._unwrap(result)

    async def remove(self, id: Id) -> bool:
        try:
            await self.provider.request(
                "DELETE",
                self.path.format(id=id),
                error_message=f"Failed to delete {self.item_key}",
            )
        except ApiException as e:
            if e.status is HTTPStatus.NOT_FOUND:
                return False
            raise e
        else:
            return True

    async def export(self) -> str:
        response = await self.provider.request_raw(
            "GET",
            self.path.format(id="export"),
            error_message=f"Failed to export {self.items_key}",
        )
        try:
            return response.text
        except UnicodeDecodeError:
            raise ApiException(
                f"Export of {self.items_key} is not valid UTF-8",
                status=response.status,
            )
