# (c) Nelen & Schuurmans

from typing import Generic
from typing import TypeVar

from crm_client.base.domain import Id
from crm_client.base.domain import Page
from crm_client.base.domain import RootEntity

T = TypeVar("T", bound=RootEntity)

__all__ = ["PaginationCache"]


class PaginationCache(Generic[T]):
    """The accumulated pages of a remote collection, for one applied filter.

    Items are kept in server order; pages are appended as they are loaded and local
    mutations are patched in without reloading. After every successful load,
    ``len(items) <= total``.
    """

    def __init__(self, page_size: int):
        assert page_size > 0
        self.page_size = page_size
        self.items: list[T] = []
        self.total = 0
        self.page = 1

    @property
    def has_more(self) -> bool:
        return len(self.items) < self.total

    @property
    def next_page(self) -> int:
        return self.page + 1

    def replace(self, page: Page[T]) -> None:
        self.items = list(page.items)
        self.total = page.total
        self.page = 1

    def append(self, page: Page[T]) -> None:
        # no de-duplication: the collection is expected to be append-stable
        self.items.extend(page.items)
        self.total = page.total
        self.page += 1

    def prepend(self, item: T) -> None:
        self.items.insert(0, item)
        self.total += 1

    def replace_item(self, id: Id, item: T) -> bool:
        for i, existing in enumerate(self.items):
            if existing.id == id:
                self.items[i] = item
                return True
        return False

    def remove_item(self, id: Id) -> bool:
        for i, existing in enumerate(self.items):
            if existing.id == id:
                del self.items[i]
                self.total = max(0, self.total - 1)
                return True
        return False
