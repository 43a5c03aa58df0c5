# (c) Nelen & Schuurmans

import csv
import io
from copy import deepcopy
from datetime import datetime
from datetime import timezone
from typing import List
from typing import Optional

from crm_client.base.domain import DoesNotExist
from crm_client.base.domain import Filter
from crm_client.base.domain import Gateway
from crm_client.base.domain import Id
from crm_client.base.domain import Json
from crm_client.base.domain import Page
from crm_client.base.domain import PageOptions

__all__ = ["InMemoryGateway"]


class InMemoryGateway(Gateway):
    """For testing purposes

    Mimics the CRM backend: newest records first, a free text 'search' over
    ``search_fields`` and exact matches on all other filter fields.
    """

    def __init__(
        self, data: List[Json], search_fields: tuple[str, ...] = ("name",)
    ):
        self.data = {x["id"]: deepcopy(x) for x in data}
        self.search_fields = search_fields

    def _get_next_id(self) -> int:
        if len(self.data) == 0:
            return 1
        else:
            return max(self.data) + 1

    def _matches(self, obj: Json, filter: Filter) -> bool:
        for key, value in filter.to_params().items():
            if key == "search":
                needle = value.lower()
                if not any(
                    needle in str(obj.get(field) or "").lower()
                    for field in self.search_fields
                ):
                    return False
            elif obj.get(key) != value:
                return False
        return True

    async def filter(
        self, filter: Filter, params: Optional[PageOptions] = None
    ) -> Page[Json]:
        result = [
            deepcopy(x) for x in reversed(self.data.values()) if self._matches(x, filter)
        ]
        total = len(result)
        if params is not None:
            result = result[params.offset : params.offset + params.limit]
        return Page(
            total=total,
            items=result,
            limit=params.limit if params else None,
            page=params.page if params else None,
        )

    async def add(self, item: Json) -> Json:
        item = item.copy()
        item.pop("id", None)
        # autoincrement (like the server does)
        id_ = self._get_next_id()
        item.setdefault("created_at", datetime.now(timezone.utc))
        self.data[id_] = {"id": id_, **item}
        return deepcopy(self.data[id_])

    async def update(self, item: Json) -> Json:
        _id = item.get("id")
        if _id is None or _id not in self.data:
            raise DoesNotExist("item", _id)
        existing = self.data[_id]
        existing.update(item)
        return deepcopy(existing)

    async def remove(self, id: Id) -> bool:
        if id not in self.data:
            return False
        del self.data[id]
        return True

    async def export(self) -> str:
        records = list(reversed(self.data.values()))
        fieldnames: list[str] = []
        for record in records:
            fieldnames.extend(x for x in record if x not in fieldnames)
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator="\n")
        writer.writeheader()
        writer.writerows(records)
        return buffer.getvalue()
