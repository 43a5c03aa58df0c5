import asyncio
from collections.abc import Callable
from typing import Protocol

__all__ = ["Debouncer", "Scheduler", "TimerHandle"]


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def call_later(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer:
    """Calls a function once its trigger has been quiet for ``delay`` seconds.

    Every ``trigger()`` cancels the pending timer and starts a new one, so a burst of
    triggers results in a single call.

    Args:
        func: Called without arguments when the timer fires.
        delay: Quiet interval in seconds.
        scheduler: Starts a timer; defaults to the running event loop's call_later.
    """

    def __init__(
        self,
        func: Callable[[], None],
        delay: float,
        scheduler: Scheduler | None = None,
    ):
        assert delay >= 0
        self.func = func
        self.delay = delay
        self._scheduler = scheduler or call_later
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        self._handle = self._scheduler(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> None:
        """Fire now if a call is pending."""
        if self._handle is not None:
            self.cancel()
            self.func()

    def _fire(self) -> None:
        self._handle = None
        self.func()
