# (c) Nelen & Schuurmans

from enum import Enum

from pydantic import field_validator

from .types import Json
from .value_object import ValueObject

__all__ = [
    "Filter",
    "ContactFilter",
    "ContactStatus",
    "ActivityFilter",
    "ActivityAction",
]


class ContactStatus(str, Enum):
    LEAD = "Lead"
    PROSPECT = "Prospect"
    CUSTOMER = "Customer"


class ActivityAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Filter(ValueObject):
    """Criteria for listing a remote collection.

    Filters are frozen and compare by value, so that 'did the filter change?' is a
    plain equality check.
    """

    def to_params(self) -> Json:
        """Query parameters for this filter; empty criteria are left out."""
        result = {}
        for key, value in self.model_dump(mode="json").items():
            if value is None or value == "":
                continue
            result[key] = value
        return result


def empty_to_none(v):
    # a selector set to 'All' arrives as an empty string
    if v == "":
        return None
    return v


class ContactFilter(Filter):
    search: str = ""
    status: ContactStatus | None = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return empty_to_none(v)


class ActivityFilter(Filter):
    action: ActivityAction | None = None

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, v):
        return empty_to_none(v)
