"""Tests for location fallback, reverse geocoding and the demo fixtures."""

import pytest

from src.core.schemas import GeoPoint, JobType, LocationFilter, SearchFilters
from src.search.demo import demo_job_page
from src.search.location import describe_location, format_coordinates, haversine_km, resolve_location

KL = GeoPoint(latitude=3.139003, longitude=101.686855)
PENANG = GeoPoint(latitude=5.4141, longitude=100.3288)
KLCC = GeoPoint(latitude=3.1579, longitude=101.7116)


class TestHaversine:
    def test_same_point(self) -> None:
        assert haversine_km(3.1, 101.6, 3.1, 101.6) == 0.0

    def test_kl_to_penang(self) -> None:
        d = haversine_km(KL.latitude, KL.longitude, PENANG.latitude, PENANG.longitude)
        assert d == pytest.approx(294, abs=5)


class TestResolveLocation:
    async def test_no_provider_uses_default(self) -> None:
        assert await resolve_location(None, KL) == KL

    async def test_provider_point(self) -> None:
        async def provider() -> GeoPoint:
            return PENANG

        assert await resolve_location(provider, KL) == PENANG

    async def test_permission_denied_falls_back(self) -> None:
        async def provider() -> GeoPoint:
            raise PermissionError("location permission denied")

        assert await resolve_location(provider, KL) == KL

    async def test_no_fix_falls_back(self) -> None:
        async def provider() -> None:
            return None

        assert await resolve_location(provider, KL) == KL


class TestDescribeLocation:
    def test_format_coordinates(self) -> None:
        assert format_coordinates(KLCC) == "3.15790, 101.71160"

    async def test_geocoder_address(self) -> None:
        async def geocoder(point: GeoPoint) -> str:
            return " Jalan Ampang, Kuala Lumpur "

        assert await describe_location(KL, geocoder) == "Jalan Ampang, Kuala Lumpur"

    async def test_geocoder_failure_shows_coordinates(self) -> None:
        async def geocoder(point: GeoPoint) -> str:
            raise TimeoutError

        assert await describe_location(KLCC, geocoder) == "3.15790, 101.71160"

    async def test_empty_address_shows_coordinates(self) -> None:
        async def geocoder(point: GeoPoint) -> str:
            return ""

        assert await describe_location(KLCC, geocoder) == "3.15790, 101.71160"


class TestDemoJobPage:
    def test_all_fixtures(self) -> None:
        page = demo_job_page(SearchFilters())
        assert page.total == 4
        assert page.is_demo is True

    def test_job_type_filter(self) -> None:
        page = demo_job_page(SearchFilters(job_type=JobType.PART_TIME))
        assert {j.id for j in page.entries} == {"demo-job-2", "demo-job-4"}

    def test_sorted_by_distance_within_radius(self) -> None:
        klcc = LocationFilter(latitude=3.1579, longitude=101.7116, radius_km=3)
        page = demo_job_page(SearchFilters(location=klcc))
        assert [j.id for j in page.entries] == ["demo-job-1", "demo-job-4"]
        assert page.entries[0].distance_km == pytest.approx(0.0, abs=1e-6)

    def test_no_match(self) -> None:
        page = demo_job_page(SearchFilters(query="astronaut"))
        assert page.total == 0
        assert page.entries == ()
