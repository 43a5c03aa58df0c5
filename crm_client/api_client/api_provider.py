import asyncio
import json as json_lib
import logging
import re
from collections.abc import Awaitable
from collections.abc import Callable
from http import HTTPStatus
from typing import Any
from urllib.parse import quote
from urllib.parse import urlencode
from urllib.parse import urljoin

import aiohttp
from aiohttp import ClientResponse
from aiohttp import ClientSession
from pydantic import AnyHttpUrl

from crm_client.base.domain import BadRequest
from crm_client.base.domain import Conflict
from crm_client.base.domain import Json
from crm_client.base.domain import NetworkError
from crm_client.base.domain import ServerError
from crm_client.base.domain import Unauthorized

from .exceptions import ApiException
from .response import Response

__all__ = ["ApiProvider", "check_exception"]

logger = logging.getLogger(__name__)

# Retry on 429 and all 5xx errors (because they are mostly temporary)
RETRY_STATUSES = frozenset(
    {
        HTTPStatus.TOO_MANY_REQUESTS,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        HTTPStatus.BAD_GATEWAY,
        HTTPStatus.SERVICE_UNAVAILABLE,
        HTTPStatus.GATEWAY_TIMEOUT,
    }
)

# The CRM API's PUT and DELETE are idempotent; POST (create, login) is not.
RETRY_METHODS = frozenset(["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE"])

DEFAULT_ERROR_MESSAGE = "Request failed"


def is_success(status: HTTPStatus) -> bool:
    """Returns True on 2xx status"""
    return (int(status) // 100) == 2


def check_exception(
    status: HTTPStatus, body: Any, default_message: str = DEFAULT_ERROR_MESSAGE
) -> None:
    """Raise the exception that corresponds to an error status.

    The API puts a human readable explanation in the 'message' field of the body.
    """
    if is_success(status):
        return
    message = body.get("message") if isinstance(body, dict) else None
    message = message or default_message
    if status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
        raise Unauthorized(message)
    elif status in (HTTPStatus.BAD_REQUEST, HTTPStatus.UNPROCESSABLE_ENTITY):
        raise BadRequest(message)
    elif status == HTTPStatus.CONFLICT:
        raise Conflict(message)
    elif status == HTTPStatus.NOT_FOUND:
        raise ApiException(message, status=status)
    else:
        raise ServerError(message, status=status)


def parse_error_body(data: bytes, content_type: str | None) -> Json:
    if not is_json_content_type(content_type):
        return {}
    try:
        return json_lib.loads(data)
    except ValueError:
        return {}


JSON_CONTENT_TYPE_REGEX = re.compile(r"^application\/[^+]*[+]?(json);?.*$")


def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    return bool(JSON_CONTENT_TYPE_REGEX.match(content_type))


def join(url: str, path: str, trailing_slash: bool = False) -> str:
    """Results in a full url without trailing slash"""
    assert url.endswith("/")
    assert not path.startswith("/")
    result = urljoin(url, path)
    if trailing_slash and not result.endswith("/"):
        result = result + "/"
    elif not trailing_slash and result.endswith("/"):
        result = result[:-1]
    return result


def add_query_params(url: str, params: Json | None) -> str:
    if not params:
        return url
    return url + "?" + urlencode(params, doseq=True)


class ApiProvider:
    """Basic JSON API provider with retry policy and bearer tokens.

    The default retry policy has 3 retries with 1, 2, 4 second intervals.

    Args:
        url: The url of the API (with trailing slash)
        headers_factory: Coroutine that returns headers (for e.g. authorization),
            typically ``Session.headers``.
        retries: Total number of retries per request
        backoff_factor: Multiplier for retry delay times (1, 2, 4, ...)
        trailing_slash: Wether to automatically add or remove trailing slashes.
        timeout: Default timeout per request in seconds.
    """

    def __init__(
        self,
        url: AnyHttpUrl | str,
        headers_factory: Callable[[], Awaitable[dict[str, str]]] | None = None,
        retries: int = 3,
        backoff_factor: float = 1.0,
        trailing_slash: bool = False,
        timeout: float = 5.0,
    ):
        self._url = str(url)
        if not self._url.endswith("/"):
            self._url += "/"
        self._headers_factory = headers_factory
        assert retries >= 0
        self._retries = retries
        self._backoff_factor = backoff_factor
        self._trailing_slash = trailing_slash
        self._timeout = timeout

    @property
    def _session(self) -> ClientSession:
        # There seems to be an issue if the ClientSession is instantiated before
        # the event loop runs. So we do that delayed in a property. Use this property
        # in a context manager.
        return ClientSession()

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        params: Json | None,
        json: Json | None,
        headers: dict[str, str] | None,
        timeout: float | None,
    ) -> Response:
        request_kwargs = {
            "method": method,
            "url": add_query_params(
                join(self._url, quote(path), self._trailing_slash), params
            ),
            "timeout": self._timeout if timeout is None else timeout,
            "json": json,
        }
        actual_headers = {}
        if self._headers_factory is not None:
            actual_headers.update(await self._headers_factory())
        if headers:
            actual_headers.update(headers)
        retries = self._retries if method.upper() in RETRY_METHODS else 0
        for attempt in range(retries + 1):
            if attempt > 0:
                backoff = self._backoff_factor * 2 ** (attempt - 1)
                logger.debug("retrying %s %s in %.1f s", method, path, backoff)
                await asyncio.sleep(backoff)
            try:
                async with self._session as session:
                    response: ClientResponse = await session.request(
                        headers=actual_headers, **request_kwargs
                    )
                    if response.status in RETRY_STATUSES and attempt < retries:
                        continue
                    return Response(
                        status=response.status,
                        data=await response.read(),
                        content_type=response.headers.get("Content-Type"),
                    )
            except (aiohttp.ClientError, asyncio.exceptions.TimeoutError) as e:
                if attempt == retries:
                    # no retries left
                    raise NetworkError(str(e) or "request timed out") from e
        raise AssertionError("unreachable")

    async def request(
        self,
        method: str,
        path: str,
        params: Json | None = None,
        json: Json | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        error_message: str = DEFAULT_ERROR_MESSAGE,
    ) -> Json | None:
        response = await self.request_raw(
            method, path, params, json, headers, timeout, error_message
        )
        if response.status is HTTPStatus.NO_CONTENT or not response.data:
            return None
        if not is_json_content_type(response.content_type):
            raise ApiException(
                f"Unexpected content type '{response.content_type}'",
                status=response.status,
            )
        try:
            result = response.json_body()
        except ValueError:
            raise ApiException("Invalid JSON in response", status=response.status)
        if not isinstance(result, dict):
            raise ApiException(
                "Expected a JSON object in response", status=response.status
            )
        return result

    async def request_raw(
        self,
        method: str,
        path: str,
        params: Json | None = None,
        json: Json | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        error_message: str = DEFAULT_ERROR_MESSAGE,
    ) -> Response:
        """Like request, but returns the raw body (e.g. for CSV downloads).

        Error statuses are raised as exceptions in the same way as ``request``.
        """
        response = await self._request_with_retry(
            method, path, params, json, headers, timeout
        )
        check_exception(
            response.status,
            parse_error_body(response.data, response.content_type),
            default_message=error_message,
        )
        return response
