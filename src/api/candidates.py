"""Candidate search service: employers searching and viewing job seekers."""

import logging
from typing import Any

from src.api.base import SearchBackend
from src.api.transport import ApiClient, parse_or_raise, unwrap_results
from src.core.schemas import (
    Availability,
    CandidateDetail,
    CandidateResult,
    SearchFilters,
    SearchResultPage,
    SkillRef,
    SortKey,
)

logger = logging.getLogger(__name__)

SEARCH_PATH = "/profile/candidates/search/"


def parse_candidate_page(data: Any, filters: SearchFilters) -> SearchResultPage[CandidateResult]:
    """Build a result page from a candidate search response body."""
    page_size = int(data.get("page_size") or filters.page_size)
    return SearchResultPage[CandidateResult](
        total=int(data.get("total") or 0),
        page=int(data.get("page") or filters.page),
        page_size=page_size,
        entries=tuple(CandidateResult.from_api(c) for c in data.get("candidates") or ()),
    )


class CandidateService(SearchBackend):
    """ML-ranked candidate search over the profile endpoints."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    @property
    def backend_id(self) -> str:
        return "candidates"

    async def search(self, filters: SearchFilters) -> SearchResultPage[CandidateResult]:
        data = await self._api.post(SEARCH_PATH, json=filters.to_payload())
        page = parse_or_raise(lambda d: parse_candidate_page(d, filters), data, "candidate search")
        logger.debug(
            "Candidate search page %d/%d: %d entries of %d",
            page.page, page.total_pages, len(page.entries), page.total,
        )
        return page

    async def get_detail(self, entity_id: str) -> CandidateDetail:
        data = await self._api.get(f"/profile/candidates/{entity_id}/")
        return parse_or_raise(CandidateDetail.from_api, data, "candidate detail")

    async def get_search_options(self) -> dict[str, Any]:
        """Popular skills plus the availability, proficiency and sort choices."""
        data = await self._api.get(SEARCH_PATH)
        return data if isinstance(data, dict) else {}

    async def quick_search(
        self,
        skill_names: list[str],
        *,
        availability: Availability | None = None,
        min_rating: float | None = None,
        page: int = 1,
    ) -> SearchResultPage[CandidateResult]:
        """Search by skill names only, ranked by match score."""
        filters = SearchFilters(
            skill_names=tuple(skill_names),
            availability=availability,
            min_rating=min_rating,
            page=page,
            sort_by=SortKey.MATCH_SCORE,
        )
        return await self.search(filters)

    async def get_skills(self) -> list[SkillRef]:
        data = await self._api.get("/skills/skills/")
        return parse_or_raise(
            lambda d: [SkillRef(id=s["id"], name=s["name"]) for s in unwrap_results(d)],
            data,
            "skill list",
        )
