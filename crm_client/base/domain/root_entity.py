# (c) Nelen & Schuurmans

from datetime import datetime
from typing import TypeVar

from .exceptions import BadRequest
from .types import Id
from .value_object import ValueObject

__all__ = ["RootEntity"]


T = TypeVar("T", bound="RootEntity")


class RootEntity(ValueObject):
    """A record of a remote collection. The server is the origin of truth: ids and
    timestamps are assigned there, never on the client.
    """

    id: Id
    created_at: datetime | None = None

    def update(self: T, **values) -> T:
        if "id" in values and values["id"] != self.id:
            raise BadRequest("Cannot change the id of an entity")
        return super().update(**values)

    def __hash__(self):
        return hash(self.__class__) + hash(self.id)
