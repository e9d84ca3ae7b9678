"""Profile service: the signed-in user's seeker or employer profile.

Covers the profile records plus work experience and education CRUD.
Update bodies are partial; unset fields are left out so the backend keeps
their current values.
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.api.transport import ApiClient, parse_or_raise, unwrap_results

logger = logging.getLogger(__name__)

BASE_PATH = "/profile/"


class SeekerProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    headline: str | None = None
    bio: str | None = None
    city: str | None = None
    country: str | None = None
    availability_status: Literal["available", "busy", "not_available"] = "available"
    hourly_rate_min: float | None = None
    hourly_rate_max: float | None = None
    rate_currency: str = "MYR"
    overall_rating: float = 0.0
    total_jobs_completed: int = 0
    is_premium: bool = False
    is_verified: bool = False
    profile_completeness: float = 0.0


class EmployerProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    avatar_url: str | None = None
    job_title: str | None = None
    department: str | None = None
    company: int | None = None
    company_name: str | None = None
    is_company_owner: bool = False
    can_post_jobs: bool = False
    can_hire: bool = False
    overall_rating: float = 0.0
    total_jobs_posted: int = 0
    is_premium: bool = False
    is_verified: bool = False


class SeekerProfileUpdate(BaseModel):
    """Fields a seeker may change. Only the ones set are sent."""

    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    headline: str | None = None
    bio: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    willing_to_travel: bool | None = None
    travel_radius_km: float | None = Field(default=None, gt=0.0)
    remote_work_available: bool | None = None
    hourly_rate_min: float | None = Field(default=None, ge=0.0)
    hourly_rate_max: float | None = Field(default=None, ge=0.0)
    rate_currency: str | None = None
    availability_status: Literal["available", "busy", "not_available"] | None = None


class EmployerProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    job_title: str | None = None
    department: str | None = None
    phone_direct: str | None = None
    is_company_owner: bool | None = None


class WorkExperience(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    company_name: str
    job_title: str
    employment_type: str | None = None
    location: str | None = None
    is_remote: bool = False
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False
    description: str | None = None
    skills_used: tuple[str, ...] = ()


class Education(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    institution_name: str
    degree: str | None = None
    field_of_study: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False
    grade: str | None = None
    description: str | None = None


class FullProfile(BaseModel):
    """Profile plus its related records, as returned by ``GET /profile/``."""

    model_config = ConfigDict(frozen=True)

    user: dict[str, Any] = Field(default_factory=dict)
    profile: dict[str, Any] = Field(default_factory=dict)
    skills: tuple[dict[str, Any], ...] = ()
    work_experiences: tuple[WorkExperience, ...] = ()
    education: tuple[Education, ...] = ()
    portfolio: tuple[dict[str, Any], ...] = ()
    certifications: tuple[dict[str, Any], ...] = ()


def _body(record: BaseModel) -> dict[str, Any]:
    return record.model_dump(mode="json", exclude_none=True, exclude={"id"})


class ProfileService:
    """REST wrapper for the profile endpoints."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_full_profile(self) -> FullProfile:
        data = await self._api.get(BASE_PATH)
        return parse_or_raise(FullProfile.model_validate, data, "profile")

    async def get_seeker_profile(self) -> SeekerProfile:
        data = await self._api.get(f"{BASE_PATH}seeker/")
        return parse_or_raise(SeekerProfile.model_validate, data, "seeker profile")

    async def update_seeker_profile(self, update: SeekerProfileUpdate) -> SeekerProfile:
        data = await self._api.put(f"{BASE_PATH}seeker/", json=_body(update))
        logger.info("Seeker profile updated")
        return parse_or_raise(SeekerProfile.model_validate, data, "seeker profile")

    async def get_employer_profile(self) -> EmployerProfile:
        data = await self._api.get(f"{BASE_PATH}employer/")
        return parse_or_raise(EmployerProfile.model_validate, data, "employer profile")

    async def update_employer_profile(self, update: EmployerProfileUpdate) -> EmployerProfile:
        data = await self._api.put(f"{BASE_PATH}employer/", json=_body(update))
        logger.info("Employer profile updated")
        return parse_or_raise(EmployerProfile.model_validate, data, "employer profile")

    async def get_public_seeker_profile(self, uuid: str) -> SeekerProfile:
        data = await self._api.get(f"{BASE_PATH}seeker/{uuid}/")
        return parse_or_raise(SeekerProfile.model_validate, data, "seeker profile")

    async def get_public_employer_profile(self, uuid: str) -> EmployerProfile:
        data = await self._api.get(f"{BASE_PATH}employer/{uuid}/")
        return parse_or_raise(EmployerProfile.model_validate, data, "employer profile")

    # --- work experience ---

    async def get_work_experiences(self) -> list[WorkExperience]:
        data = await self._api.get(f"{BASE_PATH}experience/")
        return parse_or_raise(
            lambda d: [WorkExperience.model_validate(e) for e in unwrap_results(d)], data, "experience list",
        )

    async def create_work_experience(self, experience: WorkExperience) -> WorkExperience:
        data = await self._api.post(f"{BASE_PATH}experience/", json=_body(experience))
        return parse_or_raise(WorkExperience.model_validate, data, "experience")

    async def update_work_experience(self, experience_id: int, experience: WorkExperience) -> WorkExperience:
        data = await self._api.put(f"{BASE_PATH}experience/{experience_id}/", json=_body(experience))
        return parse_or_raise(WorkExperience.model_validate, data, "experience")

    async def delete_work_experience(self, experience_id: int) -> None:
        await self._api.delete(f"{BASE_PATH}experience/{experience_id}/")

    # --- education ---

    async def get_education(self) -> list[Education]:
        data = await self._api.get(f"{BASE_PATH}education/")
        return parse_or_raise(
            lambda d: [Education.model_validate(e) for e in unwrap_results(d)], data, "education list",
        )

    async def create_education(self, education: Education) -> Education:
        data = await self._api.post(f"{BASE_PATH}education/", json=_body(education))
        return parse_or_raise(Education.model_validate, data, "education")

    async def update_education(self, education_id: int, education: Education) -> Education:
        data = await self._api.put(f"{BASE_PATH}education/{education_id}/", json=_body(education))
        return parse_or_raise(Education.model_validate, data, "education")

    async def delete_education(self, education_id: int) -> None:
        await self._api.delete(f"{BASE_PATH}education/{education_id}/")
