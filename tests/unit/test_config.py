"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from src.core.config import (
    ApiConfig,
    ChatConfig,
    CurrencyConfig,
    LocationConfig,
    SearchDefaults,
    Settings,
)
from src.core.schemas import GeoPoint, SortKey

EXAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "settings.example.yaml"


class TestApiConfig:
    def test_defaults(self) -> None:
        a = ApiConfig()
        assert a.timeout_s == 30.0
        assert a.demo_mode is False
        assert a.access_token_env == "GIGMATCH_ACCESS_TOKEN"

    def test_trailing_slash_stripped(self) -> None:
        a = ApiConfig(base_url="  https://api.example.com/api/v1/ ")
        assert a.base_url == "https://api.example.com/api/v1"

    def test_empty_base_url_rejected(self) -> None:
        with pytest.raises(ValidationError, match="base_url must not be empty"):
            ApiConfig(base_url="   ")

    def test_timeout_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ApiConfig(timeout_s=0.5)
        with pytest.raises(ValidationError):
            ApiConfig(timeout_s=120)


class TestSearchDefaults:
    def test_defaults(self) -> None:
        s = SearchDefaults()
        assert s.page_size == 20
        assert s.default_sort is SortKey.MATCH_SCORE

    def test_page_size_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SearchDefaults(page_size=0)
        with pytest.raises(ValidationError):
            SearchDefaults(page_size=101)


class TestLocationConfig:
    def test_default_is_kuala_lumpur(self) -> None:
        loc = LocationConfig()
        assert loc.city == "Kuala Lumpur"
        assert loc.to_point() == GeoPoint(latitude=3.139003, longitude=101.686855)

    def test_latitude_bounds(self) -> None:
        with pytest.raises(ValidationError):
            LocationConfig(latitude=91)


class TestCurrencyAndChat:
    def test_currency_code_upper_cased(self) -> None:
        assert CurrencyConfig(default=" usd ").default == "USD"

    def test_poll_interval_positive(self) -> None:
        assert ChatConfig().poll_interval_s == 10.0
        with pytest.raises(ValidationError):
            ChatConfig(poll_interval_s=0)


class TestSettings:
    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = dedent("""\
            api:
              base_url: https://jobs.example.com/api/v1
              timeout_s: 15
              demo_mode: true
            search:
              page_size: 10
              default_sort: rating
            location:
              latitude: 1.3521
              longitude: 103.8198
              city: Singapore
            currency:
              default: sgd
        """)
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml_content)

        settings = Settings.from_yaml(config_file)

        assert settings.api.base_url == "https://jobs.example.com/api/v1"
        assert settings.api.timeout_s == 15.0
        assert settings.api.demo_mode is True
        assert settings.search.page_size == 10
        assert settings.search.default_sort is SortKey.RATING
        assert settings.location.city == "Singapore"
        assert settings.currency.default == "SGD"
        assert settings.chat.poll_interval_s == 10.0

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")
        settings = Settings.from_yaml(config_file)
        assert settings.api.base_url == "http://localhost:8000/api/v1"
        assert settings.search.page_size == 20

    def test_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml("/nonexistent/path.yaml")

    def test_invalid_sort_raises(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("search:\n  default_sort: cheapest\n")
        with pytest.raises(ValidationError):
            Settings.from_yaml(config_file)

    def test_load_example_settings(self) -> None:
        """The shipped example config must be valid."""
        settings = Settings.from_yaml(EXAMPLE_CONFIG)
        assert settings.api.demo_mode is False
        assert settings.currency.default == "MYR"
