"""Paging, filtering and searching state of one list screen.

State machine::

    idle -> loading -> loaded | error
              ^            |
              +------------+  page, filter or search change, refresh,
                              a dialog's success callback

All filtering happens on the server: filters and the search term are sent
as query parameters and the page the server returns is shown as-is.

Overlapping fetches are sequenced. Each fetch takes the next sequence
number and only the newest one may change the state, so a slow response to
an older filter can't overwrite the result of a newer one. ``close()`` ends
the controller's lifetime: in-flight fetches are cancelled and late results
are dropped.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum
from typing import Any, Protocol

from sawa_admin.controllers.toasts import Toaster
from sawa_admin.logging import get_logger
from sawa_admin.schemas.pagination import PageMeta, Paginated
from sawa_admin.schemas.result import Err, Ok, Result

logger = get_logger(__name__)


class LoadState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ListSource[T](Protocol):
    async def list(
        self, page: int = 1, per_page: int = 10, filters: Mapping[str, Any] | None = None
    ) -> Result[list[T]]: ...


def clamp_page(page: int, last_page: int) -> int:
    return max(1, min(page, last_page))


class ListController[T]:
    def __init__(
        self,
        gateway: ListSource[T],
        toaster: Toaster,
        *,
        per_page: int = 10,
        page: int = 1,
        filters: Mapping[str, Any] | None = None,
        search: str = "",
        name: str = "list",
    ) -> None:
        self.gateway = gateway
        self.toaster = toaster
        self.name = name
        self.per_page = per_page
        self.current_page = max(1, page)
        self.filters: dict[str, Any] = dict(filters or {})
        self.search = search.strip()

        self.state = LoadState.IDLE
        self.items: list[T] = []
        self.total_pages = 1
        self.total = 0
        self.error: str | None = None

        self._seq = 0
        self._inflight: set[asyncio.Future[Result[list[T]]]] = set()
        self._closed = False

    @property
    def query_filters(self) -> dict[str, Any]:
        """Filters as sent to the server, search term included."""
        filters = dict(self.filters)
        if self.search:
            filters["search"] = self.search
        return filters

    @property
    def page(self) -> Paginated[T]:
        meta = PageMeta(
            current_page=self.current_page,
            last_page=self.total_pages,
            per_page=self.per_page,
            total=self.total,
        )
        return Paginated(items=self.items, meta=meta)

    @property
    def closed(self) -> bool:
        return self._closed

    async def load(self) -> bool:
        """Fetch the current page; True when this fetch's result was applied."""
        if self._closed:
            return False

        self._seq += 1
        seq = self._seq
        requested = self.current_page
        self.state = LoadState.LOADING

        fetch = asyncio.ensure_future(
            self.gateway.list(requested, self.per_page, self.query_filters)
        )
        self._inflight.add(fetch)
        try:
            result = await fetch
        except asyncio.CancelledError:
            if self._closed:
                logger.info("list_fetch_cancelled", screen=self.name, seq=seq)
                return False
            raise
        finally:
            self._inflight.discard(fetch)

        if self._closed or seq != self._seq:
            logger.info("stale_list_response_discarded", screen=self.name, seq=seq, latest=self._seq)
            return False

        self._apply(result, requested)
        return True

    def _apply(self, result: Result[list[T]], requested: int) -> None:
        match result:
            case Ok(data=items, meta=meta):
                meta = meta or PageMeta.parse(None, per_page=self.per_page, count=len(items))
                self.items = items
                self.total_pages = meta.last_page
                self.total = meta.total
                if meta.current_page == requested:
                    self.current_page = requested
                else:
                    self.current_page = clamp_page(requested, meta.last_page)
                self.error = None
                self.state = LoadState.LOADED
                logger.debug(
                    "list_loaded",
                    screen=self.name,
                    page=self.current_page,
                    total=self.total,
                )
            case Err(message=message):
                self.error = message
                self.state = LoadState.ERROR
                self.toaster.error("Error", message)

    async def set_page(self, page: int) -> bool:
        self.current_page = max(1, page)
        return await self.load()

    async def set_filter(self, key: str, value: Any) -> bool:
        """Change one filter and go back to the first page.

        ``None``, ``""`` and ``"all"`` remove the filter.
        """
        if value in (None, "", "all"):
            self.filters.pop(key, None)
        else:
            self.filters[key] = value
        self.current_page = 1
        return await self.load()

    async def set_search(self, term: str) -> bool:
        self.search = term.strip()
        self.current_page = 1
        return await self.load()

    async def refresh(self) -> bool:
        return await self.load()

    async def on_saved(self, *_: object) -> bool:
        """Success callback for dialogs: the list is refetched, never patched."""
        return await self.refresh()

    async def run_action(
        self,
        action: Callable[[], Awaitable[Result[Any]]],
        success_message: str,
    ) -> bool:
        """Run a row action (block, status change), toast it and refetch on success."""
        result = await action()
        if isinstance(result, Err):
            self.toaster.error("Error", result.message)
            return False
        self.toaster.success(success_message)
        await self.refresh()
        return True

    def close(self) -> None:
        """End of the screen's lifetime; pending fetches are cancelled."""
        self._closed = True
        for fetch in list(self._inflight):
            fetch.cancel()
