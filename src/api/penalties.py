"""Penalty service: penalty history, summary and appeals."""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from src.api.transport import ApiClient, parse_or_raise, unwrap_results

logger = logging.getLogger(__name__)


class Penalty(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    penalty_type: str
    severity: Literal["warning", "minor", "major", "severe"] = "warning"
    points_deducted: float = 0.0
    monetary_penalty: float | None = None
    description: str = ""
    appeal_status: Literal["none", "pending", "approved", "rejected"] = "none"
    can_appeal_now: bool = False
    is_active: bool = True
    issued_at: str = ""
    job_title: str | None = None


class PenaltySummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_penalty_points: float = 0.0
    active_penalties_count: int = 0
    no_show_count: int = 0
    late_arrival_count: int = 0
    is_warned: bool = False
    is_suspended: bool = False
    is_banned: bool = False
    suspension_until: str | None = None


class PenaltyService:
    """REST wrapper for the penalty endpoints."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_my_penalties(self) -> list[Penalty]:
        data = await self._api.get("/penalties/my_penalties/")
        return parse_or_raise(
            lambda d: [Penalty.model_validate(p) for p in d["penalties"]], data, "penalty list",
        )

    async def get_summary(self) -> PenaltySummary:
        data = await self._api.get("/penalties/summary/")
        return parse_or_raise(lambda d: PenaltySummary.model_validate(d["summary"]), data, "penalty summary")

    async def get_penalty(self, penalty_id: int) -> Penalty:
        data = await self._api.get(f"/penalties/{penalty_id}/")
        return parse_or_raise(Penalty.model_validate, data, "penalty")

    async def submit_appeal(self, penalty_id: int, reason: str) -> Penalty:
        reason = reason.strip()
        if not reason:
            msg = "appeal reason must not be empty"
            raise ValueError(msg)
        data = await self._api.post(f"/penalties/{penalty_id}/appeal/", json={"reason": reason})
        logger.info("Appeal submitted for penalty %d", penalty_id)
        return parse_or_raise(lambda d: Penalty.model_validate(d["penalty"]), data, "appeal")

    async def get_rules(self) -> list[dict[str, Any]]:
        return unwrap_results(await self._api.get("/penalties/rules/"))

    async def issue_penalty(
        self,
        user_id: int,
        penalty_type: str,
        description: str,
        *,
        application_id: int | None = None,
        severity: str | None = None,
        evidence_urls: list[str] | None = None,
    ) -> Penalty:
        """Employer-only: penalise a worker for a no-show, late arrival, etc."""
        body = {
            "user_id": user_id,
            "penalty_type": penalty_type,
            "description": description,
            "application_id": application_id,
            "severity": severity,
            "evidence_urls": evidence_urls or [],
        }
        data = await self._api.post("/penalties/issue/", json=body)
        return parse_or_raise(lambda d: Penalty.model_validate(d["penalty"]), data, "penalty")
