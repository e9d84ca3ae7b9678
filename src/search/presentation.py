"""Match presentation mapper: display-only values derived from raw data.

Every function here is total for numeric input. Missing or malformed
amounts degrade to a placeholder instead of raising.
"""

import math
from enum import Enum
from typing import Any, NamedTuple


class MatchTier(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    LOW = "Low"

    @property
    def label(self) -> str:
        return f"{self.value} Match"

    @property
    def color(self) -> str:
        """Theme colour token used for badges of this tier."""
        return _TIER_COLORS[self]


_TIER_COLORS: dict[MatchTier, str] = {
    MatchTier.EXCELLENT: "success",
    MatchTier.GOOD: "primary",
    MatchTier.FAIR: "warning",
    MatchTier.LOW: "textMuted",
}

# Lower bound of each tier, highest first. A score equal to a bound belongs
# to that tier.
_TIER_THRESHOLDS: list[tuple[float, MatchTier]] = [
    (80.0, MatchTier.EXCELLENT),
    (60.0, MatchTier.GOOD),
    (40.0, MatchTier.FAIR),
]


def match_tier(score: float) -> MatchTier:
    for threshold, tier in _TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return MatchTier.LOW


class CurrencyFormat(NamedTuple):
    symbol: str
    position: str  # "before" or "after"
    decimals: int


BASE_CURRENCY = "MYR"

CURRENCY_CONFIG: dict[str, CurrencyFormat] = {
    "MYR": CurrencyFormat("RM", "before", 2),
    "USD": CurrencyFormat("$", "before", 2),
    "SGD": CurrencyFormat("S$", "before", 2),
    "EUR": CurrencyFormat("€", "before", 2),
    "GBP": CurrencyFormat("£", "before", 2),
    "AUD": CurrencyFormat("A$", "before", 2),
    "JPY": CurrencyFormat("¥", "before", 0),
    "CNY": CurrencyFormat("¥", "before", 2),
    "INR": CurrencyFormat("₹", "before", 2),
    "THB": CurrencyFormat("฿", "before", 2),
    "IDR": CurrencyFormat("Rp", "before", 0),
    "PHP": CurrencyFormat("₱", "before", 2),
    "VND": CurrencyFormat("₫", "after", 0),
    "KRW": CurrencyFormat("₩", "before", 0),
    "HKD": CurrencyFormat("HK$", "before", 2),
    "TWD": CurrencyFormat("NT$", "before", 0),
}

PERIOD_LABELS: dict[str, str] = {
    "hourly": "/hr",
    "daily": "/day",
    "weekly": "/week",
    "monthly": "/mo",
    "yearly": "/yr",
    "per_hour": "/hr",
    "per_day": "/day",
    "per_week": "/week",
    "per_month": "/mo",
    "per_year": "/yr",
}

PLACEHOLDER = "-"


def _currency(code: str | None) -> CurrencyFormat:
    return CURRENCY_CONFIG.get((code or "").upper(), CURRENCY_CONFIG[BASE_CURRENCY])


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) or math.isinf(number) else number


def _attach_symbol(number: str, fmt: CurrencyFormat) -> str:
    return f"{number}{fmt.symbol}" if fmt.position == "after" else f"{fmt.symbol}{number}"


def _plain_number(value: float) -> str:
    """Grouped number with up to three fraction digits, trailing zeros dropped."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return text if text not in ("-0", "") else "0"


def currency_symbol(currency_code: str = BASE_CURRENCY) -> str:
    fmt = CURRENCY_CONFIG.get((currency_code or "").upper())
    return fmt.symbol if fmt else currency_code


def format_currency(
    amount: Any,
    currency_code: str = BASE_CURRENCY,
    *,
    compact: bool = False,
    show_code: bool = False,
) -> str:
    """Format an amount with its currency symbol.

    Args:
        amount: Number or numeric string. None or garbage renders as "-".
        currency_code: ISO code; unknown codes use the base currency format.
        compact: Abbreviate thousands and millions as "K" and "M".
        show_code: Append the currency code after the amount.
    """
    number = _to_number(amount)
    if number is None:
        return PLACEHOLDER

    fmt = _currency(currency_code)
    if compact and number >= 1_000_000:
        text = f"{number / 1_000_000:.1f}M"
    elif compact and number >= 1_000:
        text = f"{number / 1_000:.1f}K"
    else:
        text = f"{number:,.{fmt.decimals}f}"

    result = _attach_symbol(text, fmt)
    if show_code:
        result = f"{result} {currency_code}"
    return result


def format_distance(km: float | None) -> str:
    """"500m away" below one kilometre, "12.3km away" above, "" when unknown."""
    number = _to_number(km)
    if number is None:
        return ""
    metres = int(number * 1000 + 0.5)
    if metres < 1000:
        return f"{metres}m away"
    return f"{number:.1f}km away"


def format_salary_range(
    minimum: Any,
    maximum: Any,
    currency_code: str = BASE_CURRENCY,
    period: str | None = None,
) -> str:
    """Render a salary range such as "RM8,000 - RM12,000 /mo".

    Zero bounds count as absent, matching how listings without a salary
    report 0.
    """
    low = _to_number(minimum) or None
    high = _to_number(maximum) or None

    if low is None and high is None:
        return "Negotiable"
    if low is not None and high is not None:
        if low == high:
            result = format_currency(low, currency_code)
        else:
            fmt = _currency(currency_code)
            result = f"{_attach_symbol(_plain_number(low), fmt)} - {_attach_symbol(_plain_number(high), fmt)}"
    elif low is not None:
        result = f"From {format_currency(low, currency_code)}"
    else:
        result = f"Up to {format_currency(high, currency_code)}"

    if period:
        result += f" {PERIOD_LABELS.get(period, f'/{period}')}"
    return result
