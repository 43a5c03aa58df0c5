import asyncio
from unittest import mock

import pytest

from crm_client import Debouncer


@pytest.fixture
def func():
    return mock.Mock()


@pytest.fixture
def debouncer(func, clock):
    return Debouncer(func, 0.5, scheduler=clock.call_later)


def test_fires_after_delay(debouncer, func, clock):
    debouncer.trigger()
    assert debouncer.pending

    clock.advance(0.49)
    assert not func.called

    clock.advance(0.01)
    func.assert_called_once_with()
    assert not debouncer.pending


def test_burst_fires_once(debouncer, func, clock):
    for _ in range(5):
        debouncer.trigger()
        clock.advance(0.2)

    assert not func.called

    clock.advance(0.5)
    func.assert_called_once_with()


def test_cancel(debouncer, func, clock):
    debouncer.trigger()
    debouncer.cancel()

    clock.advance(1)
    assert not func.called
    assert not debouncer.pending


def test_flush(debouncer, func, clock):
    debouncer.trigger()
    debouncer.flush()

    func.assert_called_once_with()
    clock.advance(1)
    func.assert_called_once_with()


def test_flush_nothing_pending(debouncer, func):
    debouncer.flush()

    assert not func.called


async def test_default_scheduler(func):
    debouncer = Debouncer(func, 0.01)

    debouncer.trigger()
    debouncer.trigger()
    await asyncio.sleep(0.05)

    func.assert_called_once_with()
