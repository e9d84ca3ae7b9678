"""Tests for building search requests from UI state."""

import pytest
from pydantic import ValidationError

from src.core.schemas import Availability, LocationFilter, SkillRef, SortKey
from src.search.request_builder import SearchInput, build_search_payload, split_skill_names


class TestSplitSkillNames:
    def test_trims_and_drops_empty(self) -> None:
        assert split_skill_names(" React ,Node,, , Figma") == ("React", "Node", "Figma")

    def test_empty(self) -> None:
        assert split_skill_names("   ") == ()


class TestBuildSearchPayload:
    def test_free_text_becomes_skill_names(self) -> None:
        filters = build_search_payload(SearchInput(query="React, Node"))
        assert filters is not None
        assert filters.skill_names == ("React", "Node")
        assert filters.skills == ()
        assert filters.page == 1

    def test_selected_skills_without_text(self) -> None:
        ui = SearchInput(selected_skills=[SkillRef(id=3, name="Python"), SkillRef(id=1, name="Go")])
        filters = build_search_payload(ui)
        assert filters is not None
        assert filters.skills == (1, 3)

    def test_no_query_returns_none(self) -> None:
        assert build_search_payload(SearchInput(query="  , ")) is None

    def test_location_alone_not_enough_when_query_required(self) -> None:
        ui = SearchInput(location=LocationFilter(latitude=3.1, longitude=101.6))
        assert build_search_payload(ui) is None

    def test_location_alone_allowed_for_browsing(self) -> None:
        ui = SearchInput(location=LocationFilter(latitude=3.1, longitude=101.6))
        filters = build_search_payload(ui, require_query=False)
        assert filters is not None
        assert filters.location == ui.location

    def test_browsing_without_location_returns_none(self) -> None:
        assert build_search_payload(SearchInput(), require_query=False) is None

    def test_filters_carried_over(self) -> None:
        ui = SearchInput(
            query="barista",
            availability=Availability.AVAILABLE,
            min_rating=4.5,
            sort_by=SortKey.RATING,
            page_size=10,
        )
        filters = build_search_payload(ui, page=3)
        assert filters is not None
        assert filters.availability is Availability.AVAILABLE
        assert filters.min_rating == 4.5
        assert filters.sort_by is SortKey.RATING
        assert filters.page == 3
        assert filters.page_size == 10

    def test_same_input_same_filters(self) -> None:
        ui = SearchInput(query="React", selected_skills=[SkillRef(id=2, name="Node")])
        assert build_search_payload(ui) == build_search_payload(ui)

    def test_invalid_page(self) -> None:
        with pytest.raises(ValidationError):
            build_search_payload(SearchInput(query="React"), page=0)
