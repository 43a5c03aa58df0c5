# (c) Nelen & Schuurmans

from abc import ABC
from typing import Optional

from .filter import Filter
from .pagination import Page
from .pagination import PageOptions
from .types import Id
from .types import Json

__all__ = ["Gateway"]


class Gateway(ABC):
    """A remote collection of records.

    Implementations raise Unauthorized, NetworkError or ServerError on failure and,
    for mutations, BadRequest when the server rejects the input.
    """

    async def filter(
        self, filter: Filter, params: Optional[PageOptions] = None
    ) -> Page[Json]:
        raise NotImplementedError()

    async def add(self, item: Json) -> Json:
        raise NotImplementedError()

    async def update(self, item: Json) -> Json:
        raise NotImplementedError()

    async def remove(self, id: Id) -> bool:
        raise NotImplementedError()

    async def export(self) -> str:
        raise NotImplementedError()
