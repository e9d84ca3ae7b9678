"""Wallet service: coins, points, cash earnings and withdrawals."""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.api.transport import ApiClient, parse_or_raise, unwrap_results

logger = logging.getLogger(__name__)


class Wallet(BaseModel):
    model_config = ConfigDict(frozen=True)

    coins_balance: float = 0.0
    points_balance: float = 0.0
    cash_balance: float = 0.0
    pending_cash: float = 0.0
    currency: str = "MYR"
    is_frozen: bool = False


class WalletTransaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    transaction_type: str
    currency_type: Literal["coins", "points", "cash"]
    amount: float
    balance_after: float = 0.0
    source: str = ""
    description: str | None = None
    is_pending: bool = False
    created_at: str = ""


class EarningsSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_earned: float = 0.0
    pending_earnings: float = 0.0
    this_week: float = 0.0
    this_month: float = 0.0
    last_month: float = 0.0
    by_job_type: dict[str, float] = Field(default_factory=dict)


class CoinPackage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    total_coins: int = 0
    price: float = 0.0
    currency: str = "MYR"
    is_popular: bool = False


class Withdrawal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    amount: float
    currency: str = "MYR"
    status: str = "pending"
    net_amount: float = 0.0
    created_at: str = ""


class WithdrawalRequest(BaseModel):
    amount: float = Field(gt=0.0)
    bank_name: str = Field(min_length=1)
    account_number: str = Field(min_length=1)
    account_holder_name: str = Field(min_length=1)


class WalletService:
    """REST wrapper for the wallet endpoints."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def get_wallet(self) -> Wallet:
        data = await self._api.get("/wallet/wallet/")
        return parse_or_raise(lambda d: Wallet.model_validate(d["wallet"]), data, "wallet")

    async def get_transactions(
        self,
        transaction_type: str | None = None,
        limit: int | None = None,
    ) -> list[WalletTransaction]:
        data = await self._api.get(
            "/wallet/wallet/transactions/", params={"type": transaction_type, "limit": limit},
        )
        return parse_or_raise(
            lambda d: [WalletTransaction.model_validate(t) for t in d["transactions"]],
            data,
            "transaction list",
        )

    async def get_earnings_summary(self) -> EarningsSummary:
        data = await self._api.get("/wallet/wallet/earnings/")
        return parse_or_raise(lambda d: EarningsSummary.model_validate(d["earnings"]), data, "earnings")

    async def spend_coins(self, amount: int, feature: str, reference_id: str | None = None) -> dict[str, Any]:
        if amount <= 0:
            msg = "amount must be positive"
            raise ValueError(msg)
        data = await self._api.post(
            "/wallet/wallet/spend_coins/",
            json={"amount": amount, "feature": feature, "reference_id": reference_id},
        )
        logger.info("Spent %d coins on %s", amount, feature)
        return data if isinstance(data, dict) else {}

    async def get_points_rules(self) -> list[dict[str, Any]]:
        return unwrap_results(await self._api.get("/wallet/points-rules/"))

    async def get_coin_packages(self) -> list[CoinPackage]:
        data = await self._api.get("/wallet/coin-packages/")
        return parse_or_raise(
            lambda d: [CoinPackage.model_validate(p) for p in unwrap_results(d)], data, "coin packages",
        )

    async def get_withdrawals(self) -> list[Withdrawal]:
        data = await self._api.get("/wallet/withdrawals/")
        return parse_or_raise(
            lambda d: [Withdrawal.model_validate(w) for w in unwrap_results(d)], data, "withdrawals",
        )

    async def request_withdrawal(self, request: WithdrawalRequest) -> Withdrawal:
        data = await self._api.post("/wallet/withdrawals/", json=request.model_dump())
        return parse_or_raise(lambda d: Withdrawal.model_validate(d["withdrawal"]), data, "withdrawal")
