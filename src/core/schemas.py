"""Core data models for the gig match client.

Result records are frozen and rebuilt from every response via ``from_api``;
a new page is appended to or replaces the accumulated list, never patched.
"""

import math
from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class Availability(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    NOT_AVAILABLE = "not_available"


class Proficiency(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SortKey(str, Enum):
    MATCH_SCORE = "match_score"
    RATING = "rating"
    EXPERIENCE = "experience"
    RATE_LOW = "rate_low"
    RATE_HIGH = "rate_high"
    RECENT = "recent"


class JobType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    TEMPORARY = "temporary"
    INTERNSHIP = "internship"


class GeoPoint(BaseModel):
    """A pair of WGS84 coordinates."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class SkillRef(BaseModel):
    """A skill picked from the backend skill catalogue."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class LocationFilter(BaseModel):
    """Location facet: centre point plus search radius."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    radius_km: float = Field(default=50.0, gt=0.0)
    city: str | None = None


class SearchFilters(BaseModel):
    """A complete, well-formed search request.

    Frozen so it can serve as the snapshot a response is checked against.
    Skill ids are deduplicated and sorted, which makes two filter sets with
    the same skills in a different order compare equal.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    skills: tuple[int, ...] = ()
    skill_names: tuple[str, ...] = ()
    location: LocationFilter | None = None
    availability: Availability | None = None
    min_proficiency: Proficiency | None = None
    job_type: JobType | None = None
    remote_ok: bool | None = None
    verified_only: bool | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    min_hourly_rate: float | None = Field(default=None, ge=0.0)
    max_hourly_rate: float | None = Field(default=None, ge=0.0)
    min_jobs_completed: int | None = Field(default=None, ge=0)
    sort_by: SortKey = SortKey.MATCH_SCORE
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)

    @field_validator("skills")
    @classmethod
    def unique_skills(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(sorted(set(v)))

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body for the candidate search endpoint."""
        data = self.model_dump(mode="json", exclude_none=True, exclude={"query"})
        for key in ("skills", "skill_names"):
            if not data.get(key):
                data.pop(key, None)
        return data

    def same_query(self, other: "SearchFilters | None") -> bool:
        """True if both filter sets differ at most in their page number."""
        if other is None:
            return False
        return self.model_copy(update={"page": 1}) == other.model_copy(update={"page": 1})

    def next_page(self) -> "SearchFilters":
        return self.model_copy(update={"page": self.page + 1})


class ScoreBreakdown(BaseModel):
    """Per-factor sub-scores behind a match score."""

    model_config = ConfigDict(frozen=True)

    skills: float = Field(default=0.0, ge=0.0, le=100.0)
    location: float = Field(default=0.0, ge=0.0, le=100.0)
    rate: float = Field(default=0.0, ge=0.0, le=100.0)


def clamp_score(value: Any) -> float:
    """Coerce a backend score to a float within 0-100. Garbage becomes 0."""
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(score):
        return 0.0
    return max(0.0, min(100.0, score))


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def _enum_or_none(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return None


class MatchedEntity(BaseModel):
    """Fields shared by every scored search result."""

    model_config = ConfigDict(frozen=True)

    id: str
    match_score: float = Field(default=0.0, ge=0.0, le=100.0)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    matched_skills: tuple[str, ...] = ()
    missing_skills: tuple[str, ...] = ()


class CandidateResult(MatchedEntity):
    """A job seeker returned by the candidate search."""

    user_id: int | None = None
    name: str = ""
    headline: str = ""
    avatar_url: str | None = None
    city: str = ""
    country: str = ""
    availability: Availability | None = None
    remote_available: bool = False
    hourly_rate_min: float | None = None
    hourly_rate_max: float | None = None
    currency: str = "MYR"
    rating: float | None = None
    jobs_completed: int = 0
    is_verified: bool = False
    is_premium: bool = False

    @property
    def location_label(self) -> str:
        return ", ".join(part for part in (self.city, self.country) if part)

    @classmethod
    def _fields_from_api(cls, raw: dict[str, Any]) -> dict[str, Any]:
        skills = raw.get("skills") or []
        details = raw.get("match_details") or {}
        location = raw.get("location") or {}
        rate = raw.get("hourly_rate") or {}
        breakdown = raw.get("match_breakdown") or {}
        return {
            "id": str(raw.get("user_uuid") or raw.get("id") or ""),
            "match_score": clamp_score(raw.get("match_score")),
            "breakdown": ScoreBreakdown(
                skills=clamp_score(breakdown.get("skills")),
                location=clamp_score(breakdown.get("location")),
                rate=clamp_score(breakdown.get("rate")),
            ),
            "matched_skills": tuple(s["name"] for s in skills if s.get("is_match") and s.get("name")),
            "missing_skills": tuple(details.get("missing_skills") or ()),
            "user_id": raw.get("user_id"),
            "name": raw.get("name") or "",
            "headline": raw.get("headline") or "",
            "avatar_url": raw.get("avatar_url"),
            "city": location.get("city") or "",
            "country": location.get("country") or "",
            "availability": _enum_or_none(Availability, raw.get("availability")),
            "remote_available": bool(raw.get("remote_available")),
            "hourly_rate_min": _optional_float(rate.get("min")),
            "hourly_rate_max": _optional_float(rate.get("max")),
            "currency": rate.get("currency") or "MYR",
            "rating": _optional_float(raw.get("rating")),
            "jobs_completed": int(raw.get("jobs_completed") or 0),
            "is_verified": bool(raw.get("is_verified")),
            "is_premium": bool(raw.get("is_premium")),
        }

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "CandidateResult":
        return cls(**cls._fields_from_api(raw))


class CandidateDetail(CandidateResult):
    """Full candidate profile, as shown on the detail screen."""

    bio: str = ""
    can_message: bool = False
    member_since: str = ""
    experiences: tuple[dict[str, Any], ...] = ()
    education: tuple[dict[str, Any], ...] = ()
    certifications: tuple[dict[str, Any], ...] = ()
    portfolio: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "CandidateDetail":
        fields = cls._fields_from_api(raw)
        fields.update(
            bio=raw.get("bio") or "",
            can_message=bool((raw.get("contact") or {}).get("can_message")),
            member_since=raw.get("member_since") or "",
            experiences=tuple(raw.get("experiences") or ()),
            education=tuple(raw.get("education") or ()),
            certifications=tuple(raw.get("certifications") or ()),
            portfolio=tuple(raw.get("portfolio") or ()),
        )
        return cls(**fields)


class JobListing(MatchedEntity):
    """A job posting returned by job search or embedded in a recommendation."""

    title: str = "Untitled Job"
    company_name: str = ""
    description: str = ""
    address: str = ""
    city: str = ""
    latitude: float | None = None
    longitude: float | None = None
    job_type: JobType | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    salary_period: str | None = None
    required_skills: tuple[str, ...] = ()
    is_remote: bool = False
    posted_at: str = ""
    is_active: bool = True
    distance_km: float | None = None

    @property
    def coordinates(self) -> GeoPoint | None:
        if self.latitude is None or self.longitude is None:
            return None
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "JobListing":
        # Listings carry either a salary range or a single salary_amount.
        amount = _optional_float(raw.get("salary_amount"))
        salary_min = _optional_float(raw.get("salary_min"))
        salary_max = _optional_float(raw.get("salary_max"))
        if salary_min is None and salary_max is None and amount is not None:
            salary_min = salary_max = amount

        location = raw.get("location")
        if isinstance(location, dict):
            address = location.get("address") or ""
            city = location.get("city") or ""
            latitude = _optional_float(location.get("latitude"))
            longitude = _optional_float(location.get("longitude"))
        else:
            address = raw.get("location_address") or (location if isinstance(location, str) else "")
            city = address.split(",")[0].strip() if address else ""
            latitude = _optional_float(raw.get("latitude"))
            longitude = _optional_float(raw.get("longitude"))

        skills = raw.get("required_skills") or raw.get("skills") or []
        status = raw.get("status")
        return cls(
            id=str(raw.get("uuid") or raw.get("id") or ""),
            match_score=clamp_score(raw.get("match_score")),
            title=raw.get("title") or "Untitled Job",
            company_name=raw.get("company_name") or "",
            description=raw.get("description") or "",
            address=address,
            city=city,
            latitude=latitude,
            longitude=longitude,
            job_type=_enum_or_none(JobType, raw.get("job_type")),
            salary_min=salary_min,
            salary_max=salary_max,
            salary_currency=raw.get("salary_currency"),
            salary_period=raw.get("salary_period"),
            required_skills=tuple(s.get("name", "") if isinstance(s, dict) else str(s) for s in skills),
            is_remote=bool(raw.get("is_remote")),
            posted_at=raw.get("posted_at") or raw.get("created_at") or "",
            is_active=bool(raw["is_active"]) if "is_active" in raw else status in (None, "published"),
            distance_km=_optional_float(raw.get("distance_km")),
        )


class JobRecommendation(MatchedEntity):
    """An AI-scored job suggestion for the signed-in seeker."""

    job: JobListing
    match_reasons: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "JobRecommendation":
        job = JobListing.from_api(raw.get("job") or {})
        return cls(
            id=job.id,
            job=job,
            match_score=clamp_score(raw.get("match_score")),
            breakdown=ScoreBreakdown(
                skills=clamp_score(raw.get("skill_match")),
                location=clamp_score(raw.get("location_match")),
                rate=clamp_score(raw.get("rate_match")),
            ),
            matched_skills=tuple(raw.get("matched_skills") or ()),
            missing_skills=tuple(raw.get("missing_skills") or ()),
            match_reasons=tuple(raw.get("match_reasons") or ()),
        )


class ApplicationRequest(BaseModel):
    """Body of a job application or bid."""

    application_type: Literal["apply", "bid"] = "apply"
    cover_letter: str | None = None
    resume_id: int | None = None
    shift_id: int | None = None
    proposed_rate: float | None = Field(default=None, gt=0.0)

    @model_validator(mode="after")
    def bid_needs_rate(self) -> "ApplicationRequest":
        if self.application_type == "bid" and self.proposed_rate is None:
            msg = "a bid requires proposed_rate"
            raise ValueError(msg)
        return self


class ApplicationRecord(BaseModel):
    """A submitted application as acknowledged by the backend."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    job_id: str
    status: str = "pending"
    application_type: str = "apply"

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ApplicationRecord":
        job = raw.get("job")
        job_id = job.get("id") if isinstance(job, dict) else job
        return cls(
            id=raw.get("id"),
            job_id=str(job_id if job_id is not None else ""),
            status=raw.get("status") or "pending",
            application_type=raw.get("application_type") or "apply",
        )


EntryT = TypeVar("EntryT")


class SearchResultPage(BaseModel, Generic[EntryT]):
    """One page of results as returned by a search endpoint."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1)
    entries: tuple[EntryT, ...] = ()
    is_demo: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size)

    @model_validator(mode="after")
    def page_within_range(self) -> "SearchResultPage[EntryT]":
        if self.total > 0 and self.page > self.total_pages:
            msg = f"page {self.page} exceeds total pages {self.total_pages}"
            raise ValueError(msg)
        return self
