"""Tests for core data models."""

import pytest
from pydantic import ValidationError

from src.core.schemas import (
    ApplicationRecord,
    ApplicationRequest,
    Availability,
    CandidateDetail,
    CandidateResult,
    JobListing,
    JobRecommendation,
    JobType,
    LocationFilter,
    SearchFilters,
    SearchResultPage,
    clamp_score,
)

# ---------------------------------------------------------------------------
# SearchFilters
# ---------------------------------------------------------------------------


class TestSearchFilters:
    def test_defaults(self) -> None:
        f = SearchFilters()
        assert f.page == 1
        assert f.page_size == 20
        assert f.skills == ()

    def test_page_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SearchFilters(page=0)

    def test_page_size_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SearchFilters(page_size=0)
        with pytest.raises(ValidationError):
            SearchFilters(page_size=500)

    def test_skills_deduplicated_and_order_insensitive(self) -> None:
        a = SearchFilters(skills=[3, 1, 3, 2])
        b = SearchFilters(skills=[2, 3, 1])
        assert a.skills == (1, 2, 3)
        assert a == b

    def test_frozen(self) -> None:
        f = SearchFilters()
        with pytest.raises(ValidationError):
            f.page = 2  # type: ignore[misc]

    def test_payload_omits_unset_fields(self) -> None:
        f = SearchFilters(query="React, Node", skill_names=["React", "Node"])
        payload = f.to_payload()
        assert payload == {
            "skill_names": ["React", "Node"],
            "sort_by": "match_score",
            "page": 1,
            "page_size": 20,
        }

    def test_payload_includes_location_and_enums(self) -> None:
        f = SearchFilters(
            skills=[7],
            location=LocationFilter(latitude=3.1, longitude=101.6, radius_km=10),
            availability="available",
        )
        payload = f.to_payload()
        assert payload["skills"] == [7]
        assert payload["availability"] == "available"
        assert payload["location"] == {"latitude": 3.1, "longitude": 101.6, "radius_km": 10.0}

    def test_same_query_ignores_page(self) -> None:
        f = SearchFilters(skills=[1])
        assert f.same_query(f.next_page())
        assert not f.same_query(SearchFilters(skills=[2]))
        assert not f.same_query(None)

    def test_next_page(self) -> None:
        assert SearchFilters(page=2).next_page().page == 3


# ---------------------------------------------------------------------------
# SearchResultPage
# ---------------------------------------------------------------------------


class TestSearchResultPage:
    def test_total_pages_rounds_up(self) -> None:
        page = SearchResultPage(total=45, page=1, page_size=20)
        assert page.total_pages == 3

    def test_exact_multiple(self) -> None:
        assert SearchResultPage(total=40, page=2, page_size=20).total_pages == 2

    def test_empty_result(self) -> None:
        page = SearchResultPage(total=0, page=1, page_size=20)
        assert page.total_pages == 0

    def test_page_beyond_total_rejected(self) -> None:
        with pytest.raises(ValidationError, match="exceeds total pages"):
            SearchResultPage(total=45, page=4, page_size=20)

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SearchResultPage(total=-1)


# ---------------------------------------------------------------------------
# Result records
# ---------------------------------------------------------------------------


def test_clamp_score() -> None:
    assert clamp_score(101.5) == 100.0
    assert clamp_score(-3) == 0.0
    assert clamp_score("72.5") == 72.5
    assert clamp_score(None) == 0.0
    assert clamp_score("n/a") == 0.0


class TestCandidateResult:
    def test_from_api(self) -> None:
        raw = {
            "id": 5,
            "user_id": 42,
            "user_uuid": "u-42",
            "name": "Aisyah",
            "location": {"city": "Kuala Lumpur", "country": "Malaysia"},
            "availability": "available",
            "hourly_rate": {"min": 30, "max": 45, "currency": "MYR"},
            "skills": [
                {"id": 1, "name": "React", "is_match": True},
                {"id": 2, "name": "Figma", "is_match": False},
            ],
            "match_score": 87.5,
            "match_details": {"missing_skills": ["Node"]},
            "match_breakdown": {"skills": 90, "location": 80, "rate": 70},
        }
        c = CandidateResult.from_api(raw)
        assert c.id == "u-42"
        assert c.user_id == 42
        assert c.availability is Availability.AVAILABLE
        assert c.matched_skills == ("React",)
        assert c.missing_skills == ("Node",)
        assert c.breakdown.skills == 90.0
        assert c.hourly_rate_min == 30.0
        assert c.location_label == "Kuala Lumpur, Malaysia"

    def test_missing_fields_tolerated(self) -> None:
        c = CandidateResult.from_api({"id": 9, "availability": "on_holiday"})
        assert c.id == "9"
        assert c.availability is None
        assert c.match_score == 0.0
        assert c.location_label == ""

    def test_detail_from_api(self) -> None:
        d = CandidateDetail.from_api({
            "user_uuid": "u-1",
            "bio": "Barista",
            "contact": {"can_message": True},
            "experiences": [{"job_title": "Barista", "company": "Kopi"}],
        })
        assert d.can_message is True
        assert d.experiences[0]["company"] == "Kopi"


class TestJobListing:
    def test_nested_location(self) -> None:
        job = JobListing.from_api({
            "id": 1,
            "uuid": "job-1",
            "title": "Barista",
            "location": {"address": "KLCC", "city": "Kuala Lumpur", "latitude": 3.15, "longitude": 101.71},
            "job_type": "part_time",
            "salary_min": 12,
            "salary_max": 15,
            "required_skills": [{"id": 1, "name": "Coffee"}],
        })
        assert job.id == "job-1"
        assert job.job_type is JobType.PART_TIME
        assert job.coordinates is not None
        assert job.required_skills == ("Coffee",)

    def test_flat_location_and_salary_amount(self) -> None:
        job = JobListing.from_api({
            "id": 7,
            "title": "",
            "location_address": "Bangsar South, KL",
            "latitude": "3.11",
            "longitude": "101.66",
            "salary_amount": "2500.00",
            "status": "draft",
        })
        assert job.id == "7"
        assert job.title == "Untitled Job"
        assert job.city == "Bangsar South"
        assert job.latitude == 3.11
        assert job.salary_min == job.salary_max == 2500.0
        assert job.is_active is False

    def test_no_coordinates(self) -> None:
        assert JobListing.from_api({"id": 1}).coordinates is None


class TestJobRecommendation:
    def test_from_api(self) -> None:
        rec = JobRecommendation.from_api({
            "job": {"id": 3, "title": "Python Developer"},
            "match_score": 82,
            "skill_match": 90,
            "location_match": 75,
            "rate_match": 60,
            "matched_skills": ["Python", "Django"],
            "missing_skills": ["AWS"],
            "match_reasons": ["Strong skill overlap"],
        })
        assert rec.id == "3"
        assert rec.job.title == "Python Developer"
        assert rec.breakdown.location == 75.0
        assert rec.missing_skills == ("AWS",)
        assert rec.match_reasons == ("Strong skill overlap",)


class TestApplications:
    def test_bid_requires_rate(self) -> None:
        with pytest.raises(ValidationError, match="proposed_rate"):
            ApplicationRequest(application_type="bid")

    def test_record_with_nested_job(self) -> None:
        r = ApplicationRecord.from_api({"id": 11, "job": {"id": 3}, "status": "pending"})
        assert r.job_id == "3"

    def test_record_with_job_id(self) -> None:
        assert ApplicationRecord.from_api({"id": 12, "job": 4}).job_id == "4"
