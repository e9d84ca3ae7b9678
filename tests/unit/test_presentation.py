"""Tests for display formatting of match scores, money and distance."""

import pytest

from src.search.presentation import (
    MatchTier,
    currency_symbol,
    format_currency,
    format_distance,
    format_salary_range,
    match_tier,
)

# ---------------------------------------------------------------------------
# Match tiers
# ---------------------------------------------------------------------------


class TestMatchTier:
    @pytest.mark.parametrize(
        ("score", "tier"),
        [
            (100, MatchTier.EXCELLENT),
            (80, MatchTier.EXCELLENT),
            (79.999, MatchTier.GOOD),
            (60, MatchTier.GOOD),
            (59.99, MatchTier.FAIR),
            (40, MatchTier.FAIR),
            (39.9, MatchTier.LOW),
            (0, MatchTier.LOW),
        ],
    )
    def test_boundaries(self, score: float, tier: MatchTier) -> None:
        assert match_tier(score) is tier

    def test_label_and_color(self) -> None:
        assert MatchTier.EXCELLENT.label == "Excellent Match"
        assert MatchTier.EXCELLENT.color == "success"
        assert MatchTier.LOW.color == "textMuted"


# ---------------------------------------------------------------------------
# Currency
# ---------------------------------------------------------------------------


class TestFormatCurrency:
    def test_default_myr(self) -> None:
        assert format_currency(1234.5) == "RM1,234.50"

    def test_zero_decimal_currency(self) -> None:
        assert format_currency(1500, "JPY") == "¥1,500"

    def test_symbol_after(self) -> None:
        assert format_currency(50000, "VND") == "50,000₫"

    def test_compact(self) -> None:
        assert format_currency(12500, compact=True) == "RM12.5K"
        assert format_currency(2_300_000, "USD", compact=True) == "$2.3M"

    def test_show_code(self) -> None:
        assert format_currency(10, "SGD", show_code=True) == "S$10.00 SGD"

    def test_numeric_string(self) -> None:
        assert format_currency("99.9") == "RM99.90"

    def test_unknown_code_uses_base_format(self) -> None:
        assert format_currency(5, "XYZ") == "RM5.00"

    @pytest.mark.parametrize("amount", [None, "abc", float("nan")])
    def test_placeholder(self, amount: object) -> None:
        assert format_currency(amount) == "-"

    def test_currency_symbol(self) -> None:
        assert currency_symbol("myr") == "RM"
        assert currency_symbol("XYZ") == "XYZ"


# ---------------------------------------------------------------------------
# Distance
# ---------------------------------------------------------------------------


class TestFormatDistance:
    def test_metres(self) -> None:
        assert format_distance(0.5) == "500m away"
        assert format_distance(0.4) == "400m away"
        assert format_distance(0.9994) == "999m away"

    def test_rounding_up_to_a_kilometre_switches_unit(self) -> None:
        assert format_distance(0.9996) == "1.0km away"

    def test_kilometres(self) -> None:
        assert format_distance(1) == "1.0km away"
        assert format_distance(12.34) == "12.3km away"

    def test_zero(self) -> None:
        assert format_distance(0) == "0m away"

    def test_unknown(self) -> None:
        assert format_distance(None) == ""
        assert format_distance(float("nan")) == ""


# ---------------------------------------------------------------------------
# Salary range
# ---------------------------------------------------------------------------


class TestFormatSalaryRange:
    def test_range_with_period(self) -> None:
        assert format_salary_range(8000, 12000, "MYR", "monthly") == "RM8,000 - RM12,000 /mo"

    def test_fractional_range(self) -> None:
        assert format_salary_range(12.5, 15, "MYR", "hourly") == "RM12.5 - RM15 /hr"

    def test_equal_bounds(self) -> None:
        assert format_salary_range(2500, 2500, "MYR") == "RM2,500.00"

    def test_min_only(self) -> None:
        assert format_salary_range(20, None, "USD", "hourly") == "From $20.00 /hr"

    def test_max_only(self) -> None:
        assert format_salary_range(None, 3000, "SGD") == "Up to S$3,000.00"

    def test_negotiable(self) -> None:
        assert format_salary_range(None, None) == "Negotiable"
        assert format_salary_range(0, 0, "MYR", "monthly") == "Negotiable"

    def test_unknown_period(self) -> None:
        assert format_salary_range(100, 200, "MYR", "per_shift") == "RM100 - RM200 /per_shift"

    def test_equal_bounds_match_single_amount(self) -> None:
        assert format_salary_range(100, 100, "MYR") == format_currency(100, "MYR")
