# (c) Nelen & Schuurmans

import asyncio
import logging
from collections.abc import Callable
from collections.abc import Coroutine
from typing import Any
from typing import Generic
from typing import Optional
from typing import TypeVar

from crm_client.base.domain import BadRequest
from crm_client.base.domain import Conflict
from crm_client.base.domain import DoesNotExist
from crm_client.base.domain import Filter
from crm_client.base.domain import Id
from crm_client.base.domain import Json
from crm_client.base.domain import LoadState
from crm_client.base.domain import NetworkError
from crm_client.base.domain import Page
from crm_client.base.domain import PageOptions
from crm_client.base.domain import Repository
from crm_client.base.domain import RootEntity
from crm_client.base.domain import ServerError
from crm_client.base.domain import Unauthorized

from .pagination_cache import PaginationCache

__all__ = ["SyncController", "GATEWAY_ERRORS"]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=RootEntity)
F = TypeVar("F", bound=Filter)

GATEWAY_ERRORS = (
    BadRequest,
    Conflict,
    DoesNotExist,
    NetworkError,
    ServerError,
    Unauthorized,
)


class SyncController(Generic[T, F]):
    """Keeps a paginated, filtered view of a remote collection in sync.

    Fresh loads replace the cache, load-more appends to it and mutations are patched
    into it after the server accepted them. Nothing is retried: a failure moves the
    load state to error and it is up to the user to try again.

    Every load gets a sequence number. A completion is only applied if no other load
    was started in the meantime and the controller was not closed, so that a slow
    response never overwrites a newer one.
    """

    def __init__(
        self,
        repo: Repository[T],
        initial_filter: F,
        page_size: int,
        on_error: Callable[[Exception], None] | None = None,
    ):
        self.repo = repo
        self.on_error = on_error
        self.cache: PaginationCache[T] = PaginationCache(page_size)
        self.load_state = LoadState.idle()
        self.applied_filter = initial_filter
        # the filter of the latest fresh load; equals applied_filter once it completed
        self.target_filter = initial_filter
        self._sequence = 0
        self._in_flight: int | None = None
        self._closed = False
        self._tasks: set[asyncio.Task] = set()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_more(self) -> bool:
        return self.cache.has_more

    def _start_load(self) -> int:
        self._sequence += 1
        self._in_flight = self._sequence
        self.load_state = LoadState.loading()
        return self._sequence

    def _is_current(self, sequence: int) -> bool:
        return not self._closed and sequence == self._sequence

    def _finish_load(self) -> None:
        self._in_flight = None
        # a failed mutation during the load may have set an error; keep it
        if self.load_state.is_loading:
            self.load_state = LoadState.idle()

    def _fail(self, exc: Exception) -> None:
        logger.warning("%s failed: %s", type(self.repo).__name__, exc)
        self.load_state = LoadState.error(exc)
        if self.on_error is not None:
            self.on_error(exc)

    def _fail_load(self, sequence: int, exc: Exception) -> None:
        if self._is_current(sequence):
            self._in_flight = None
            self._fail(exc)

    async def _fetch(self, filter: F, page_number: int) -> Optional[Page[T]]:
        """Request one page. Returns None if it failed or was superseded."""
        sequence = self._start_load()
        logger.debug(
            "loading page %d with %r (request %d)", page_number, filter, sequence
        )
        try:
            page = await self.repo.filter(
                filter,
                params=PageOptions(limit=self.cache.page_size, page=page_number),
            )
        except GATEWAY_ERRORS as e:
            self._fail_load(sequence, e)
            return None
        except Exception as e:
            # unexpected; still leave Loading before propagating
            self._fail_load(sequence, e)
            raise
        if not self._is_current(sequence):
            logger.debug("discarding stale response of request %d", sequence)
            return None
        return page

    async def load_fresh(self, filter: F) -> None:
        if self._closed:
            return
        self.target_filter = filter
        page = await self._fetch(filter, 1)
        if page is None:
            return
        self.cache.replace(page)
        self.applied_filter = filter
        self._finish_load()

    async def load_more(self) -> None:
        if self._closed or not self.cache.has_more or self._in_flight is not None:
            return
        page = await self._fetch(self.applied_filter, self.cache.next_page)
        if page is None:
            return
        self.cache.append(page)
        self._finish_load()

    def apply_local_create(self, item: T) -> None:
        self.cache.prepend(item)

    def apply_local_update(self, id: Id, item: T) -> None:
        if not self.cache.replace_item(id, item):
            logger.debug("updated item %s is not in the cache", id)

    def apply_local_delete(self, id: Id) -> None:
        self.cache.remove_item(id)

    async def create(self, values: Json) -> Optional[T]:
        try:
            item = await self.repo.add(values)
        except GATEWAY_ERRORS as e:
            self._fail(e)
            return None
        if not self._closed:
            self.apply_local_create(item)
        return item

    async def update(self, id: Id, values: Json) -> Optional[T]:
        try:
            item = await self.repo.update(id, values)
        except GATEWAY_ERRORS as e:
            self._fail(e)
            return None
        if not self._closed:
            self.apply_local_update(id, item)
        return item

    async def delete(self, id: Id) -> bool:
        try:
            await self.repo.remove(id)
        except GATEWAY_ERRORS as e:
            self._fail(e)
            return False
        if not self._closed:
            self.apply_local_delete(id)
        return True

    async def export_snapshot(self) -> Optional[str]:
        try:
            return await self.repo.export()
        except GATEWAY_ERRORS as e:
            self._fail(e)
            return None

    def dismiss_error(self) -> None:
        if not self.load_state.is_error:
            return
        if self._in_flight is not None:
            self.load_state = LoadState.loading()
        else:
            self.load_state = LoadState.idle()

    def on_filter_change(self, filter: F) -> None:
        """Starts a fresh load in the background if the filter differs."""
        if self._closed or filter == self.target_filter:
            return
        self.target_filter = filter
        self._spawn(self.load_fresh(filter))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def settle(self) -> None:
        """Wait until all background loads have completed."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    def close(self) -> None:
        self._closed = True
        self._in_flight = None
