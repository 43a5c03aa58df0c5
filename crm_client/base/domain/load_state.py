# (c) Nelen & Schuurmans

from enum import Enum

from .exceptions import BadRequest
from .exceptions import NetworkError
from .exceptions import Unauthorized
from .value_object import ValueObject

__all__ = ["LoadState", "LoadStatus", "ErrorReason"]


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class ErrorReason(str, Enum):
    AUTH = "auth"
    VALIDATION = "validation"
    NETWORK = "network"
    SERVER = "server"

    @classmethod
    def for_exception(cls, exc: Exception) -> "ErrorReason":
        if isinstance(exc, Unauthorized):
            return cls.AUTH
        elif isinstance(exc, BadRequest):
            return cls.VALIDATION
        elif isinstance(exc, NetworkError):
            return cls.NETWORK
        return cls.SERVER


class LoadState(ValueObject):
    """Loading state of a whole collection view: idle, loading or error(message)."""

    status: LoadStatus = LoadStatus.IDLE
    message: str | None = None
    reason: ErrorReason | None = None

    @classmethod
    def idle(cls) -> "LoadState":
        return cls(status=LoadStatus.IDLE)

    @classmethod
    def loading(cls) -> "LoadState":
        return cls(status=LoadStatus.LOADING)

    @classmethod
    def error(cls, exc: Exception) -> "LoadState":
        return cls(
            status=LoadStatus.ERROR,
            message=str(exc),
            reason=ErrorReason.for_exception(exc),
        )

    @property
    def is_idle(self) -> bool:
        return self.status is LoadStatus.IDLE

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is LoadStatus.ERROR
