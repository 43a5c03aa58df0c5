# (c) Nelen & Schuurmans

import logging
import os
from collections.abc import Mapping

from pydantic import AnyHttpUrl
from pydantic import ConfigDict
from pydantic import Field

from .api_client import ApiProvider
from .base.domain import Session
from .base.domain import ValueObject

__all__ = ["ClientConfig"]

logger = logging.getLogger(__name__)

ENV_PREFIX = "CRM_"


class ClientConfig(ValueObject):
    model_config = ConfigDict(frozen=True, validate_default=True)

    api_url: AnyHttpUrl = "http://localhost:5000/api"  # type: ignore
    contacts_page_size: int = Field(default=10, gt=0)
    activities_page_size: int = Field(default=20, gt=0)
    search_debounce: float = Field(default=0.5, ge=0)
    timeout: float = Field(default=5.0, gt=0)
    retries: int = Field(default=3, ge=0)
    backoff_factor: float = 1.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """Read settings from CRM_API_URL, CRM_CONTACTS_PAGE_SIZE, etc."""
        if environ is None:
            environ = os.environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if environ.get(key):
                values[name] = environ[key]
        return cls.create(**values)

    def provider(self, session: Session | None = None) -> ApiProvider:
        """An ApiProvider that authenticates with ``session`` (if given)."""
        logger.debug("using API at %s", self.api_url)
        return ApiProvider(
            url=self.api_url,
            headers_factory=session.headers if session is not None else None,
            retries=self.retries,
            backoff_factor=self.backoff_factor,
            timeout=self.timeout,
        )
