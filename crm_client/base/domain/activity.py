# (c) Nelen & Schuurmans

from typing import Annotated
from typing import Any
from typing import Union

from pydantic import Field

from .filter import ActivityAction
from .repository import Repository
from .root_entity import RootEntity
from .types import Id
from .value_object import ValueObject

__all__ = ["Activity", "ActivityUser", "ActivityRepository"]


class ActivityUser(ValueObject):
    username: str | None = None
    email: str | None = None


class Activity(RootEntity):
    """An entry of the (read-only) activity log.

    The server may log actions that the client does not know about; those are kept
    as plain strings.
    """

    action: Annotated[Union[ActivityAction, str], Field(union_mode="left_to_right")]
    resource_type: str | None = None
    resource_id: Id | None = None
    resource_name: str | None = None
    user: ActivityUser | None = None
    details: Any = None

    @property
    def action_name(self) -> str:
        if isinstance(self.action, ActivityAction):
            return self.action.value
        return self.action


class ActivityRepository(Repository[Activity]):
    pass
