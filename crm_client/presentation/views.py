# (c) Nelen & Schuurmans

import logging
from collections.abc import Callable
from typing import Any
from typing import Generic
from typing import Optional
from typing import TypeVar

from crm_client.base.application import FilterState
from crm_client.base.application import Scheduler
from crm_client.base.application import SyncController
from crm_client.base.domain import Activity
from crm_client.base.domain import ActivityFilter
from crm_client.base.domain import ActivityRepository
from crm_client.base.domain import Contact
from crm_client.base.domain import ContactFilter
from crm_client.base.domain import ContactRepository
from crm_client.base.domain import Filter
from crm_client.base.domain import Id
from crm_client.base.domain import Json
from crm_client.base.domain import LoadState
from crm_client.base.domain import Repository
from crm_client.base.domain import RootEntity
from crm_client.base.domain import Unauthorized
from crm_client.base.domain import ValueObject

from .forms import ContactForm

__all__ = ["ViewSnapshot", "CollectionView", "ContactsDashboard", "ActivityLog"]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=RootEntity)
F = TypeVar("F", bound=Filter)


class ViewSnapshot(ValueObject):
    """Everything a collection view renders, as one read-only value."""

    items: tuple[Any, ...]
    total: int
    has_more: bool
    load_state: LoadState
    draft_filter: Filter
    applied_filter: Filter


class CollectionView(Generic[T, F]):
    """Wires a FilterState to a SyncController and exposes the user intents.

    Args:
        repo: The repository of the remote collection.
        initial_filter: The filter of the first load.
        page_size: Number of items per page.
        on_unauthorized: Called when the API rejects the credentials (e.g. to show
            the login page).
        debounce: Quiet interval (seconds) for free text filter fields.
        scheduler: Timer scheduler for the debounce (for testing).
    """

    def __init__(
        self,
        repo: Repository[T],
        initial_filter: F,
        page_size: int,
        on_unauthorized: Callable[[], None] | None = None,
        debounce: float = 0.5,
        scheduler: Scheduler | None = None,
    ):
        self.on_unauthorized = on_unauthorized
        self.controller: SyncController[T, F] = SyncController(
            repo, initial_filter, page_size, on_error=self._handle_error
        )
        self.filters: FilterState[F] = FilterState(
            initial_filter,
            self.controller.on_filter_change,
            delay=debounce,
            scheduler=scheduler,
        )

    def _handle_error(self, exc: Exception) -> None:
        if isinstance(exc, Unauthorized) and self.on_unauthorized is not None:
            logger.info("not authorized, redirecting to login")
            self.on_unauthorized()

    @property
    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            items=tuple(self.controller.cache.items),
            total=self.controller.cache.total,
            has_more=self.controller.has_more,
            load_state=self.controller.load_state,
            draft_filter=self.filters.draft,
            applied_filter=self.controller.applied_filter,
        )

    async def open(self) -> None:
        await self.controller.load_fresh(self.filters.effective)

    def on_filter_field_change(self, key: str, value: Any) -> None:
        self.filters.set_draft_field(key, value)

    async def on_search_submit(self) -> None:
        if self.filters.flush():
            await self.controller.settle()
        else:
            await self.controller.load_fresh(self.filters.effective)

    async def on_load_more(self) -> None:
        await self.controller.load_more()

    def on_dismiss_error(self) -> None:
        self.controller.dismiss_error()

    def close(self) -> None:
        self.filters.close()
        self.controller.close()


class ContactsDashboard(CollectionView[Contact, ContactFilter]):
    def __init__(
        self,
        repo: ContactRepository,
        page_size: int = 10,
        initial_filter: ContactFilter | None = None,
        **kwargs,
    ):
        super().__init__(repo, initial_filter or ContactFilter(), page_size, **kwargs)

    async def on_create(self, attrs: Json) -> Optional[Contact]:
        """Raises BadRequest if the form is invalid (nothing is sent then)."""
        form = ContactForm.create(**attrs)
        return await self.controller.create(form.to_values())

    async def on_update(self, id: Id, attrs: Json) -> Optional[Contact]:
        """Raises BadRequest if the form is invalid (nothing is sent then)."""
        form = ContactForm.create(**attrs)
        return await self.controller.update(id, form.to_values())

    async def on_delete(self, id: Id) -> bool:
        return await self.controller.delete(id)

    async def on_export(self) -> Optional[str]:
        return await self.controller.export_snapshot()


class ActivityLog(CollectionView[Activity, ActivityFilter]):
    def __init__(
        self,
        repo: ActivityRepository,
        page_size: int = 20,
        initial_filter: ActivityFilter | None = None,
        **kwargs,
    ):
        super().__init__(repo, initial_filter or ActivityFilter(), page_size, **kwargs)
