# (c) Nelen & Schuurmans

from .exceptions import Unauthorized
from .types import Id
from .value_object import ValueObject

__all__ = ["User", "Session", "require_session"]


class User(ValueObject):
    id: Id | None = None
    username: str | None = None
    email: str | None = None


class Session(ValueObject):
    """The credentials of a logged in user.

    A session is handed explicitly to whatever needs it (typically as the
    ``headers_factory`` of an ApiProvider). Nothing reads it from global state.
    """

    access_token: str
    refresh_token: str | None = None
    user: User | None = None

    async def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}


def require_session(session: Session | None) -> Session:
    """Guard for views that need a logged in user."""
    if session is None or not session.access_token:
        raise Unauthorized("login required")
    return session
