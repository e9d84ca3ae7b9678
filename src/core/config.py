"""Configuration models and YAML loader for the gig match client."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from src.core.schemas import GeoPoint, SortKey


class ApiConfig(BaseModel):
    """Backend connection settings."""

    base_url: str = "http://localhost:8000/api/v1"
    timeout_s: float = Field(default=30.0, ge=1.0, le=60.0)
    access_token_env: str = "GIGMATCH_ACCESS_TOKEN"
    refresh_token_env: str = "GIGMATCH_REFRESH_TOKEN"
    demo_mode: bool = False

    @field_validator("base_url")
    @classmethod
    def base_url_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "base_url must not be empty"
            raise ValueError(msg)
        return v.strip().rstrip("/")


class SearchDefaults(BaseModel):
    """Defaults applied to every search session."""

    page_size: int = Field(default=20, ge=1, le=100)
    default_sort: SortKey = SortKey.MATCH_SCORE


class LocationConfig(BaseModel):
    """Fallback location used when the device cannot provide one."""

    latitude: float = Field(default=3.139003, ge=-90.0, le=90.0)
    longitude: float = Field(default=101.686855, ge=-180.0, le=180.0)
    city: str = "Kuala Lumpur"
    country: str = "Malaysia"
    radius_km: float = Field(default=50.0, gt=0.0)

    def to_point(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


class CurrencyConfig(BaseModel):
    """Currency used when a record does not carry its own."""

    default: str = "MYR"

    @field_validator("default")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.strip().upper()


class ChatConfig(BaseModel):
    """Chat refresh settings."""

    poll_interval_s: float = Field(default=10.0, gt=0.0)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    search: SearchDefaults = Field(default_factory=SearchDefaults)
    location: LocationConfig = Field(default_factory=LocationConfig)
    currency: CurrencyConfig = Field(default_factory=CurrencyConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
