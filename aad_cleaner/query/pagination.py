"""
Lazy iteration over paged Microsoft Graph collection responses
"""

import inspect
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    next_link: Optional[str] = None

    @classmethod
    def from_collection(cls, response) -> "Page":
        """
        Build a page from any Graph collection response (value + odata_next_link).
        A missing response is treated as an empty final page.
        """
        if response is None:
            return cls()
        return cls(items=list(response.value or []), next_link=response.odata_next_link)


class PageIterator(Generic[T]):
    """
    Walks the items of a first page and every page reachable through its
    next links, fetching each following page only when the consumer asks for it.

    Args:
        first_page: Page already returned by the initial query
        fetch_page: Coroutine function taking a next link and returning the following Page

    An iterator can only be consumed once.
    """

    def __init__(self, first_page: Page[T], fetch_page: Callable[[str], Awaitable[Page[T]]]):
        self._first_page = first_page
        self._fetch_page = fetch_page
        self._consumed = False

    def __aiter__(self) -> AsyncIterator[T]:
        if self._consumed:
            raise RuntimeError("PageIterator has already been consumed")
        self._consumed = True
        return self._items()

    async def _items(self) -> AsyncIterator[T]:
        page = self._first_page
        while True:
            for item in page.items:
                yield item
            if not page.next_link:
                return
            page = await self._fetch_page(page.next_link)

    async def iterate(self, callback: Callable[[T], object]) -> None:
        """
        Pass each item to callback until it returns a falsy value or the pages run out.
        The callback may be a plain function or a coroutine function.
        """
        items = self.__aiter__()
        try:
            async for item in items:
                keep_going = callback(item)
                if inspect.isawaitable(keep_going):
                    keep_going = await keep_going
                if not keep_going:
                    break
        finally:
            await items.aclose()
