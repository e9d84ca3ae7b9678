"""Search session controller: one screen's search/browse interaction.

State machine::

    IDLE → SEARCHING → READY | FAILED
    READY → LOADING_MORE → READY | FAILED (partial)
    any → REFRESHING → READY | FAILED

Single asyncio loop, no locks. Superseded requests are not cancelled: each
new search bumps a generation counter and any response from an older
generation, or for filters that no longer match the session, is dropped.
"""

import logging
from enum import Enum
from typing import Any

from src.api.base import SearchBackend
from src.core.config import LocationConfig
from src.core.errors import ApiError, ErrorKind, SessionError
from src.core.schemas import GeoPoint, LocationFilter, SearchFilters
from src.search.accumulator import Clear, LoadMore, NewSearch, ResultSetState, apply_event
from src.search.location import LocationProvider, resolve_location
from src.search.request_builder import SearchInput, build_search_payload

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    READY = "ready"
    LOADING_MORE = "loading_more"
    REFRESHING = "refreshing"
    FAILED = "failed"


class SessionController:
    """Drives a SearchBackend from user actions.

    Usage::

        controller = SessionController(CandidateService(api))
        await controller.submit(SearchInput(query="React, Node"))
        while controller.can_load_more:
            await controller.load_more()
    """

    def __init__(
        self,
        backend: SearchBackend,
        *,
        location_provider: LocationProvider | None = None,
        default_location: GeoPoint | None = None,
        require_query: bool = True,
    ) -> None:
        self._backend = backend
        self._location_provider = location_provider
        self._default_location = default_location or LocationConfig().to_point()
        self._require_query = require_query

        self.state = ResultSetState()
        self.status = SessionStatus.IDLE
        self.error: SessionError | None = None
        self.notice: ErrorKind | None = None
        self.partial = False

        self._generation = 0
        self._in_flight: SearchFilters | None = None
        self._last_filters: SearchFilters | None = None
        self._loading_more = False
        self._failed_op: str | None = None

    # --- read side ---

    @property
    def results(self) -> tuple[Any, ...]:
        return self.state.results

    @property
    def can_load_more(self) -> bool:
        return (
            self.status is SessionStatus.READY
            and not self._loading_more
            and self.state.has_more
        )

    # --- user actions ---

    async def submit(self, ui_state: SearchInput) -> None:
        """Start a fresh search from page 1."""
        ui_state = await self._with_location(ui_state)
        filters = build_search_payload(ui_state, require_query=self._require_query)
        if filters is None:
            self._generation += 1
            self._in_flight = None
            self.state = apply_event(self.state, Clear())
            self.status = SessionStatus.IDLE
            self.error = None
            self.notice = ErrorKind.NO_QUERY
            return
        self.notice = None
        await self._run_search(filters, SessionStatus.SEARCHING)

    async def refresh(self) -> None:
        """Pull-to-refresh: re-run the last search from page 1."""
        if self._last_filters is None:
            logger.debug("Nothing to refresh")
            return
        await self._run_search(self._last_filters.model_copy(update={"page": 1}), SessionStatus.REFRESHING)

    async def load_more(self) -> bool:
        """Fetch and append the next page. Returns True if a page was appended.

        Ignored unless the session is READY with pages left and no other
        next-page request pending.
        """
        if not self.can_load_more or self.state.filters is None:
            return False

        self._loading_more = True
        self.status = SessionStatus.LOADING_MORE
        generation = self._generation
        requested = self.state.filters.model_copy(update={"page": self.state.current_page + 1})
        try:
            page = await self._backend.search(requested)
        except ApiError as e:
            if generation != self._generation:
                self._discard_stale(requested)
                return False
            self._fail(e, op="load_more", partial=True)
            return False
        finally:
            self._loading_more = False

        if generation != self._generation or not requested.same_query(self.state.filters):
            self._discard_stale(requested)
            return False

        self.state = apply_event(self.state, LoadMore(page))
        self.status = SessionStatus.READY
        self.partial = False
        return True

    async def retry(self) -> None:
        """Repeat whichever operation failed last."""
        if self.status is not SessionStatus.FAILED:
            return
        if self._failed_op == "load_more":
            self.status = SessionStatus.READY
            await self.load_more()
        else:
            await self.refresh()

    def clear(self) -> None:
        self._generation += 1
        self._in_flight = None
        self._last_filters = None
        self.state = apply_event(self.state, Clear())
        self.status = SessionStatus.IDLE
        self.error = None
        self.notice = None
        self.partial = False

    # --- internals ---

    async def _run_search(self, filters: SearchFilters, status: SessionStatus) -> None:
        if self.status is status and filters == self._in_flight:
            logger.debug("Identical %s already in flight, ignoring", status.value)
            return

        self._generation += 1
        generation = self._generation
        self._in_flight = filters
        self._last_filters = filters
        self.status = status
        self.error = None

        logger.info("Searching %s (page %d)", self._backend.backend_id, filters.page)
        try:
            page = await self._backend.search(filters)
        except ApiError as e:
            if generation != self._generation:
                self._discard_stale(filters)
                return
            self._in_flight = None
            self._fail(e, op="search", partial=bool(self.state.results))
            return

        if generation != self._generation:
            self._discard_stale(filters)
            return

        self._in_flight = None
        self.state = apply_event(self.state, NewSearch(filters, page))
        self.status = SessionStatus.READY
        self.partial = False
        logger.info(
            "%s: %d results, page %d/%d",
            self._backend.backend_id, self.state.total, self.state.current_page, self.state.total_pages,
        )

    async def _with_location(self, ui_state: SearchInput) -> SearchInput:
        if not ui_state.near_me or ui_state.location is not None:
            return ui_state
        point = await resolve_location(self._location_provider, self._default_location)
        location = LocationFilter(
            latitude=point.latitude, longitude=point.longitude, radius_km=ui_state.radius_km,
        )
        return ui_state.model_copy(update={"location": location})

    def _fail(self, exc: ApiError, *, op: str, partial: bool) -> None:
        self.error = SessionError.from_exception(exc)
        self.status = SessionStatus.FAILED
        self.partial = partial
        self._failed_op = op
        logger.warning("%s %s failed (%s): %s", self._backend.backend_id, op, exc.kind.value, exc.message)

    def _discard_stale(self, filters: SearchFilters) -> None:
        logger.debug(
            "Discarding %s response for page %d of superseded filters",
            ErrorKind.STALE_RESULT.value, filters.page,
        )
