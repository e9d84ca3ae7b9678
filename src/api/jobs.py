"""Job search, AI recommendations and job applications."""

import logging
from typing import Any

from src.api.base import SearchBackend
from src.api.transport import ApiClient, parse_or_raise, unwrap_results
from src.core.errors import ApiError, ErrorKind, ServerError
from src.core.schemas import (
    ApplicationRecord,
    ApplicationRequest,
    JobListing,
    JobRecommendation,
    SearchFilters,
    SearchResultPage,
)
from src.search.demo import demo_job_page
from src.search.location import haversine_km

logger = logging.getLogger(__name__)

RECOMMENDATIONS_PATH = "/jobs/ai-recommendations/"
APPLICATIONS_PATH = "/jobs/applications/"

_DEMO_FALLBACK_KINDS = (ErrorKind.NETWORK, ErrorKind.SERVER)


def build_job_params(filters: SearchFilters) -> dict[str, Any]:
    """Map search filters to ``/jobs/`` query parameters."""
    query = filters.query.strip() or ", ".join(filters.skill_names)
    params: dict[str, Any] = {
        "query": query or None,
        "job_type": filters.job_type.value if filters.job_type else None,
        "page": filters.page,
        "page_size": filters.page_size,
    }
    if filters.location is not None:
        params["latitude"] = filters.location.latitude
        params["longitude"] = filters.location.longitude
        params["radius_km"] = filters.location.radius_km
    return params


def parse_job_page(data: Any, filters: SearchFilters) -> SearchResultPage[JobListing]:
    """Build a result page from a bare list or a DRF paginated body."""
    items = unwrap_results(data)
    total = int(data.get("count") or len(items)) if isinstance(data, dict) else len(items)
    jobs = [JobListing.from_api(j) for j in items]
    if filters.location is not None:
        jobs = [_with_distance(job, filters) for job in jobs]
    return SearchResultPage[JobListing](
        total=total,
        page=filters.page if total else 1,
        page_size=filters.page_size,
        entries=tuple(jobs),
    )


def _with_distance(job: JobListing, filters: SearchFilters) -> JobListing:
    point = job.coordinates
    if job.distance_km is not None or point is None or filters.location is None:
        return job
    distance = haversine_km(
        filters.location.latitude, filters.location.longitude,
        point.latitude, point.longitude,
    )
    return job.model_copy(update={"distance_km": distance})


def parse_recommendations(data: Any) -> list[JobRecommendation]:
    if isinstance(data, dict) and "success" in data:
        if not data["success"]:
            msg = data.get("error") or "Failed to get recommendations"
            raise ServerError(str(msg))
        data = (data.get("data") or {}).get("recommendations") or []
    elif isinstance(data, dict):
        data = data.get("recommendations") or unwrap_results(data)
    return [JobRecommendation.from_api(r) for r in data]


class JobService(SearchBackend):
    """Job endpoints for seekers.

    With ``demo_mode=True`` a first-page search that fails with a network
    or server error returns fixture listings flagged ``is_demo``. Later
    pages always raise, so fixtures never extend a real result set. Off by
    default.
    """

    def __init__(self, api: ApiClient, *, demo_mode: bool = False) -> None:
        self._api = api
        self._demo_mode = demo_mode

    @property
    def backend_id(self) -> str:
        return "jobs"

    async def search(self, filters: SearchFilters) -> SearchResultPage[JobListing]:
        try:
            data = await self._api.get("/jobs/", params=build_job_params(filters))
        except ApiError as e:
            if not self._demo_mode or filters.page != 1 or e.kind not in _DEMO_FALLBACK_KINDS:
                raise
            logger.warning("Job search failed (%s), serving demo listings", e.message)
            return demo_job_page(filters)
        return parse_or_raise(lambda d: parse_job_page(d, filters), data, "job search")

    async def get_detail(self, entity_id: str) -> JobListing:
        data = await self._api.get(f"/jobs/{entity_id}/")
        return parse_or_raise(JobListing.from_api, data, "job detail")

    async def get_recommendations(self, count: int = 20, pool_size: int = 20) -> list[JobRecommendation]:
        """Fetch AI-ranked jobs for the signed-in seeker.

        Args:
            count: How many recommendations to return.
            pool_size: How many candidate jobs the backend scores before ranking.
        """
        if count < 1 or pool_size < 1:
            msg = "count and pool_size must be positive"
            raise ValueError(msg)
        data = await self._api.get(
            RECOMMENDATIONS_PATH, params={"count": count, "pool_size": pool_size},
        )
        recommendations = parse_or_raise(parse_recommendations, data, "recommendations")
        logger.info("Received %d recommendations", len(recommendations))
        return recommendations

    async def apply(self, job_id: int | str, application: ApplicationRequest) -> ApplicationRecord:
        body = {"job": _job_key(job_id), **application.model_dump(exclude_none=True)}
        data = await self._api.post(APPLICATIONS_PATH, json=body)
        record = parse_or_raise(ApplicationRecord.from_api, data or {}, "application")
        if not record.job_id:
            record = record.model_copy(update={"job_id": str(job_id)})
        logger.info("Applied to job %s (%s)", job_id, application.application_type)
        return record

    async def get_my_applications(self) -> list[ApplicationRecord]:
        data = await self._api.get(f"{APPLICATIONS_PATH}my_applications/")
        return parse_or_raise(
            lambda d: [ApplicationRecord.from_api(a) for a in unwrap_results(d)],
            data,
            "application list",
        )

    async def withdraw_application(self, application_id: int) -> None:
        await self._api.post(f"{APPLICATIONS_PATH}{application_id}/withdraw/")


def _job_key(job_id: int | str) -> int | str:
    if isinstance(job_id, str) and job_id.isdigit():
        return int(job_id)
    return job_id
