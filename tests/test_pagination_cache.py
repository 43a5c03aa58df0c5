import pytest

from crm_client import Page
from crm_client import PaginationCache


@pytest.fixture
def cache(make_contact):
    cache = PaginationCache(page_size=2)
    cache.replace(Page(items=[make_contact(1), make_contact(2)], total=3))
    return cache


def test_empty():
    cache = PaginationCache(page_size=10)

    assert cache.items == []
    assert cache.total == 0
    assert cache.page == 1
    assert cache.has_more is False


def test_page_size_positive():
    with pytest.raises(AssertionError):
        PaginationCache(page_size=0)


def test_replace(cache, make_contact):
    cache.append(Page(items=[make_contact(3)], total=3))

    cache.replace(Page(items=[make_contact(8)], total=1))

    assert [x.id for x in cache.items] == [8]
    assert cache.total == 1
    assert cache.page == 1


def test_has_more(cache):
    assert cache.has_more is True
    assert cache.next_page == 2


def test_append(cache, make_contact):
    cache.append(Page(items=[make_contact(3)], total=3))

    assert [x.id for x in cache.items] == [1, 2, 3]
    assert cache.page == 2
    assert cache.has_more is False


def test_append_takes_latest_total(cache, make_contact):
    cache.append(Page(items=[make_contact(3)], total=4))

    assert cache.total == 4
    assert cache.has_more is True


def test_prepend(cache, make_contact):
    cache.prepend(make_contact(9))

    assert [x.id for x in cache.items] == [9, 1, 2]
    assert cache.total == 4


def test_replace_item(cache, make_contact):
    assert cache.replace_item(2, make_contact(2, "new name")) is True

    assert cache.items[1].name == "new name"
    assert cache.total == 3


def test_replace_item_missing(cache, make_contact):
    assert cache.replace_item(5, make_contact(5)) is False

    assert [x.id for x in cache.items] == [1, 2]


def test_remove_item(cache):
    assert cache.remove_item(1) is True

    assert [x.id for x in cache.items] == [2]
    assert cache.total == 2


def test_remove_item_missing(cache):
    assert cache.remove_item(5) is False

    assert cache.total == 3


def test_remove_item_total_floor(cache):
    cache.total = 0

    cache.remove_item(1)

    assert cache.total == 0
