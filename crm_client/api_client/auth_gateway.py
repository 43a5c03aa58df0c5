import logging
from http import HTTPStatus
from typing import Optional

import inject

from crm_client.base.domain import Json
from crm_client.base.domain import Session
from crm_client.base.domain import User
from crm_client.base.infrastructure import CamelCaseMapper

from .api_provider import ApiProvider
from .exceptions import ApiException

__all__ = ["AuthGateway"]

logger = logging.getLogger(__name__)


class AuthGateway:
    """Exchanges credentials for a Session."""

    mapper = CamelCaseMapper()

    def __init__(self, provider_override: Optional[ApiProvider] = None):
        self.provider_override = provider_override

    @property
    def provider(self) -> ApiProvider:
        return self.provider_override or inject.instance(ApiProvider)

    def _to_user(self, user) -> User | None:
        if not isinstance(user, dict):
            return None
        return User.create(**self.mapper.to_internal(user))

    def _to_session(self, result: Json | None) -> Session:
        result = self.mapper.to_internal(result or {})
        if not result.get("access_token"):
            raise ApiException("No access token in response", status=HTTPStatus.OK)
        user = result.get("user")
        return Session.create(
            access_token=result["access_token"],
            refresh_token=result.get("refresh_token"),
            user=self._to_user(user),
        )

    async def login(self, email: str, password: str) -> Session:
        result = await self.provider.request(
            "POST",
            "auth/login",
            json={"email": email, "password": password},
            error_message="Login failed",
        )
        session = self._to_session(result)
        logger.info("logged in as %s", email)
        return session

    async def signup(self, username: str, email: str, password: str) -> Session:
        result = await self.provider.request(
            "POST",
            "auth/signup",
            json={"username": username, "email": email, "password": password},
            error_message="Signup failed",
        )
        return self._to_session(result)

    async def logout(self, session: Session) -> None:
        if not session.refresh_token:
            return
        await self.provider.request(
            "POST",
            "auth/logout",
            json={"refreshToken": session.refresh_token},
            error_message="Logout failed",
        )
