import re
from typing import Any

from ..domain import Json

__all__ = ["Mapper", "CamelCaseMapper"]


class Mapper:
    def to_internal(self, external: Any) -> Json:
        return external

    def to_external(self, internal: Json) -> Json:
        return internal


CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake(key: str) -> str:
    return CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def to_camel(key: str) -> str:
    first, *rest = key.split("_")
    return first + "".join(x.title() for x in rest)


class CamelCaseMapper(Mapper):
    """Maps a JSON document with '_id' and camelCase keys to snake_case and back.

    Only top-level keys are renamed. The id is not sent to the server (it goes into
    the url instead).
    """

    def to_internal(self, external: Any) -> Json:
        result = {}
        for key, value in external.items():
            if key == "_id":
                result["id"] = value
            elif key.startswith("_"):
                continue
            else:
                result[to_snake(key)] = value
        return result

    def to_external(self, internal: Json) -> Json:
        return {to_camel(key): value for (key, value) in internal.items() if key != "id"}
