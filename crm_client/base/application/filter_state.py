# (c) Nelen & Schuurmans

from collections.abc import Callable
from collections.abc import Iterable
from typing import Generic
from typing import TypeVar

from crm_client.base.domain import BadRequest
from crm_client.base.domain import Filter

from .debounce import Debouncer
from .debounce import Scheduler

__all__ = ["FilterState"]

F = TypeVar("F", bound=Filter)


class FilterState(Generic[F]):
    """The filter as the user is typing it (draft) and as it takes effect (effective).

    Free text fields reach the effective filter only after the user stopped typing
    for ``delay`` seconds. All other fields (selectors) take effect immediately.
    ``on_change`` is called with the new effective filter whenever it changes by
    value.
    """

    def __init__(
        self,
        initial: F,
        on_change: Callable[[F], None],
        debounced_fields: Iterable[str] = ("search",),
        delay: float = 0.5,
        scheduler: Scheduler | None = None,
    ):
        self.draft = initial
        self.effective = initial
        self._on_change = on_change
        self._debounced_fields = frozenset(debounced_fields) & set(
            type(initial).model_fields
        )
        self._debouncer = Debouncer(self._propagate_debounced, delay, scheduler)

    def set_draft_field(self, key: str, value) -> None:
        if key not in type(self.draft).model_fields:
            raise BadRequest(f"unknown filter field '{key}'")
        self.draft = self.draft.update(**{key: value})
        if key in self._debounced_fields:
            self._debouncer.trigger()
        else:
            self._set_effective(self.effective.update(**{key: getattr(self.draft, key)}))

    def flush(self) -> bool:
        """Let the complete draft take effect now. Returns whether it changed."""
        self._debouncer.cancel()
        return self._set_effective(self.draft)

    def close(self) -> None:
        self._debouncer.cancel()

    def _propagate_debounced(self) -> None:
        values = {key: getattr(self.draft, key) for key in self._debounced_fields}
        self._set_effective(self.effective.update(**values))

    def _set_effective(self, value: F) -> bool:
        if value == self.effective:
            return False
        self.effective = value
        self._on_change(value)
        return True
