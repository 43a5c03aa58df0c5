# (c) Nelen & Schuurmans

from typing import Generic
from typing import Optional
from typing import Type
from typing import TypeVar

from .filter import Filter
from .gateway import Gateway
from .pagination import Page
from .pagination import PageOptions
from .root_entity import RootEntity
from .types import Id
from .types import Json

__all__ = ["Repository"]

T = TypeVar("T", bound=RootEntity)


class Repository(Generic[T]):
    entity: Type[T]

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    def __init_subclass__(cls) -> None:
        (base,) = cls.__orig_bases__  # type: ignore
        (entity,) = base.__args__
        super().__init_subclass__()
        cls.entity = entity

    async def filter(
        self, filter: Filter, params: Optional[PageOptions] = None
    ) -> Page[T]:
        page = await self.gateway.filter(filter, params=params)
        return Page(
            total=page.total,
            limit=page.limit,
            page=page.page,
            items=[self.entity.create(**x) for x in page.items],
        )

    async def add(self, values: Json) -> T:
        created = await self.gateway.add(values)
        return self.entity.create(**created)

    async def update(self, id: Id, values: Json) -> T:
        updated = await self.gateway.update({**values, "id": id})
        return self.entity.create(**updated)

    async def remove(self, id: Id) -> bool:
        return await self.gateway.remove(id)

    async def export(self) -> str:
        return await self.gateway.export()
