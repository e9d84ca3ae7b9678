"""Result accumulator: a pure reducer over search result events.

NewSearch replaces, LoadMore appends only the page right after the current
one, Clear empties. Anything else leaves the state untouched, which is what
protects the list from late or duplicate page responses.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from src.core.schemas import SearchFilters, SearchResultPage

logger = logging.getLogger(__name__)


class ResultSetState(BaseModel):
    """Everything fetched so far for the current filter set."""

    model_config = ConfigDict(frozen=True)

    filters: SearchFilters | None = None
    results: tuple[Any, ...] = ()
    total: int = 0
    current_page: int = 0
    total_pages: int = 0
    is_demo: bool = False

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages


@dataclass(frozen=True)
class NewSearch:
    filters: SearchFilters
    page: SearchResultPage[Any]


@dataclass(frozen=True)
class LoadMore:
    page: SearchResultPage[Any]


@dataclass(frozen=True)
class Clear:
    pass


Event = NewSearch | LoadMore | Clear


def apply_event(state: ResultSetState, event: Event) -> ResultSetState:
    """Return the state after ``event``. Rejected events return ``state`` itself."""
    if isinstance(event, Clear):
        return ResultSetState()

    if isinstance(event, NewSearch):
        return ResultSetState(
            filters=event.filters,
            results=tuple(event.page.entries),
            total=event.page.total,
            current_page=event.page.page,
            total_pages=event.page.total_pages,
            is_demo=event.page.is_demo,
        )

    expected = state.current_page + 1
    if state.filters is None or event.page.page != expected:
        logger.debug(
            "Rejected page %d (expected %d), state unchanged", event.page.page, expected,
        )
        return state

    return state.model_copy(update={
        "filters": state.filters.model_copy(update={"page": event.page.page}),
        "results": state.results + tuple(event.page.entries),
        "total": event.page.total,
        "current_page": event.page.page,
        "total_pages": event.page.total_pages,
        "is_demo": state.is_demo or event.page.is_demo,
    })
