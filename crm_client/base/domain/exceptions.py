# (c) Nelen & Schuurmans

from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from .types import Id

__all__ = [
    "BadRequest",
    "Conflict",
    "DoesNotExist",
    "NetworkError",
    "ServerError",
    "Unauthorized",
]


class DoesNotExist(Exception):
    def __init__(self, name: str, id: Id | None = None):
        super().__init__()
        self.name = name
        self.id = id

    def __str__(self):
        if self.id:
            return f"does not exist: {self.name} with id={self.id}"
        else:
            return f"does not exist: {self.name}"


class Conflict(Exception):
    def __init__(self, msg: str | None = None):
        super().__init__(msg)


class BadRequest(Exception):
    """User-correctable input; raised by form validation and for HTTP 400 / 422.

    ``errors()`` gives one entry per offending field so that forms can show them
    inline. A plain message (e.g. from the server) is reported on the form as a whole.
    """

    def __init__(self, err_or_msg: ValidationError | str):
        self._internal_error = err_or_msg
        super().__init__(err_or_msg)

    def errors(self) -> list[ErrorDetails]:
        if isinstance(self._internal_error, ValidationError):
            return self._internal_error.errors()
        return [
            ErrorDetails(
                type="value_error",
                msg=self._internal_error,
                loc=[],  # type: ignore
                input=None,
            )
        ]

    def field_errors(self) -> dict[str, str]:
        """Map field names to the first error message on that field.

        Errors that are not tied to a field are stored under the empty string.
        """
        result: dict[str, str] = {}
        for details in self.errors():
            key = ",".join(str(x) for x in details["loc"])
            msg = details["msg"]
            # pydantic prefixes messages from custom validators
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, ") :]
            result.setdefault(key, msg)
        return result

    def __str__(self) -> str:
        error = self._internal_error
        if isinstance(error, ValidationError):
            details = error.errors()[0]
            loc = "'" + ",".join([str(x) for x in details["loc"]]) + "' "
            if loc == "'*' ":
                loc = ""
            return f"validation error: {loc}{details['msg']}"
        return super().__str__()


class Unauthorized(Exception):
    def __init__(self, msg: str = "authentication required"):
        super().__init__(msg)


class NetworkError(Exception):
    def __init__(self, msg: str = "network error"):
        super().__init__(msg)


class ServerError(Exception):
    def __init__(self, msg: str = "server error", status: Any = None):
        super().__init__(msg)
        self.status = status
