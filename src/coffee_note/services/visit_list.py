"""Live, debounced visit list for interactive callers."""

import asyncio
from collections.abc import Callable

from coffee_note.domain.visits import Visit
from coffee_note.services.visits import SortOption, filter_and_sort

DEFAULT_DEBOUNCE_SECONDS = 0.3


class VisitListView:
    """Keeps a filtered and sorted view of a changing visit collection.

    Source and query changes are applied after ``debounce_seconds`` of
    quiet; sort changes apply immediately to the last applied inputs.
    Without a running event loop every change applies immediately.
    """

    def __init__(
        self,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: Callable[[list[Visit]], None] | None = None,
    ) -> None:
        self.debounce_seconds = debounce_seconds
        self.on_change = on_change
        self.sort_option = SortOption.DATE_DESCENDING
        self.filtered: list[Visit] = []
        self._visits: list[Visit] = []
        self._query = ""
        self._applied_visits: list[Visit] = []
        self._applied_query = ""
        self._pending: asyncio.TimerHandle | None = None

    @property
    def visits(self) -> list[Visit]:
        return self._visits

    @property
    def query(self) -> str:
        return self._query

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def set_visits(self, visits: list[Visit]) -> None:
        """Replace the source collection, e.g. from a listener update."""
        self._visits = list(visits)
        self._schedule()

    def set_query(self, query: str) -> None:
        """Update the search text."""
        self._query = query
        self._schedule()

    def set_sort_option(self, sort_option: SortOption) -> None:
        """Change the ordering and recompute right away."""
        self.sort_option = sort_option
        self._recompute()

    def refresh(self) -> None:
        """Apply pending source and query changes now."""
        self._cancel()
        self._apply()

    def close(self) -> None:
        """Drop any pending recompute."""
        self._cancel()

    def _schedule(self) -> None:
        self._cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._apply()
            return
        self._pending = loop.call_later(self.debounce_seconds, self._fire)

    def _fire(self) -> None:
        self._pending = None
        self._apply()

    def _cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _apply(self) -> None:
        self._applied_visits = self._visits
        self._applied_query = self._query
        self._recompute()

    def _recompute(self) -> None:
        self.filtered = filter_and_sort(
            self._applied_visits, self._applied_query, self.sort_option
        )
        if self.on_change is not None:
            self.on_change(self.filtered)
