# (c) Nelen & Schuurmans

from datetime import datetime
from datetime import timezone

import pytest

from crm_client import Contact


class FakeTimer:
    def __init__(self, clock: "FakeClock", when: float, callback):
        self.clock = clock
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """A scheduler for Debouncer / FilterState that runs on simulated time."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(self, self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [x for x in self.timers if not x.cancelled]

    def advance_to(self, when: float) -> None:
        while True:
            due = [x for x in self.pending if x.when <= when]
            if not due:
                break
            timer = min(due, key=lambda x: x.when)
            self.timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = when

    def advance(self, seconds: float) -> None:
        self.advance_to(self.now + seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def _make_contact(id: int, name: str | None = None, **kwargs) -> Contact:
    return Contact(
        id=id,
        name=name or f"contact {id}",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        **kwargs,
    )


@pytest.fixture
def make_contact():
    return _make_contact
