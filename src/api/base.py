"""Abstract base class for searchable backends."""

from abc import ABC, abstractmethod
from typing import Any

from src.core.schemas import SearchFilters, SearchResultPage


class SearchBackend(ABC):
    """Base class that every paginated search service must implement."""

    @property
    @abstractmethod
    def backend_id(self) -> str:
        """Unique identifier for this backend (e.g. 'candidates')."""

    @abstractmethod
    async def search(self, filters: SearchFilters) -> SearchResultPage[Any]:
        """Fetch one page of scored results for the given filters."""

    @abstractmethod
    async def get_detail(self, entity_id: str) -> Any:
        """Fetch the full record behind a search result."""
