"""Request builder: UI filter state → SearchFilters.

Pure functions, no network. Returns None instead of a payload when there is
nothing to search for, so the caller can show a prompt rather than send a
match-everything query.
"""

import logging

from pydantic import BaseModel, Field

from src.core.schemas import (
    Availability,
    JobType,
    LocationFilter,
    Proficiency,
    SearchFilters,
    SkillRef,
    SortKey,
)

logger = logging.getLogger(__name__)


class SearchInput(BaseModel):
    """What the user has typed and toggled on the search screen."""

    query: str = ""
    selected_skills: list[SkillRef] = Field(default_factory=list)
    location: LocationFilter | None = None
    near_me: bool = False
    radius_km: float = Field(default=50.0, gt=0.0)
    availability: Availability | None = None
    min_proficiency: Proficiency | None = None
    job_type: JobType | None = None
    remote_ok: bool | None = None
    verified_only: bool | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    min_hourly_rate: float | None = Field(default=None, ge=0.0)
    max_hourly_rate: float | None = Field(default=None, ge=0.0)
    sort_by: SortKey = SortKey.MATCH_SCORE
    page_size: int = Field(default=20, ge=1, le=100)


def split_skill_names(text: str) -> tuple[str, ...]:
    """Split comma-separated free text into trimmed, non-empty skill names."""
    return tuple(part.strip() for part in text.split(",") if part.strip())


def build_search_payload(
    ui_state: SearchInput,
    page: int = 1,
    *,
    require_query: bool = True,
) -> SearchFilters | None:
    """Convert UI state into a search request.

    Args:
        ui_state: Current screen state.
        page: Page to request; load-more passes ``current_page + 1``.
        require_query: When False, a location alone is enough to search
            (nearby browsing). Text or selected skills are otherwise required.

    Returns:
        SearchFilters, or None when there is no query to send.
    """
    skill_names = split_skill_names(ui_state.query)
    skill_ids = tuple(s.id for s in ui_state.selected_skills)

    if not skill_names and not skill_ids:
        if require_query or ui_state.location is None:
            logger.debug("No query text and no selected skills, nothing to search")
            return None

    return SearchFilters(
        query=ui_state.query.strip(),
        skills=skill_ids,
        skill_names=skill_names,
        location=ui_state.location,
        availability=ui_state.availability,
        min_proficiency=ui_state.min_proficiency,
        job_type=ui_state.job_type,
        remote_ok=ui_state.remote_ok,
        verified_only=ui_state.verified_only,
        min_rating=ui_state.min_rating,
        min_hourly_rate=ui_state.min_hourly_rate,
        max_hourly_rate=ui_state.max_hourly_rate,
        sort_by=ui_state.sort_by,
        page=page,
        page_size=ui_state.page_size,
    )
