import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class PagedList(Generic[T]):
    """
    One page of a query plus paging metadata derived from the total count.

    ``current_page`` is never checked against ``total_pages``: asking for a page
    past the end simply yields no items.
    """

    items: list[T] = field(default_factory=list)
    total_count: int = 0
    current_page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0 or self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def map(self, fn: Callable[[T], U]) -> "PagedList[U]":
        return PagedList(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            current_page=self.current_page,
            page_size=self.page_size,
        )

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
