"""Tests for quarterly expiration arithmetic"""

from datetime import date, datetime, timedelta, timezone

import pytest

from basis_app.data.models import CarryParams
from basis_app.utils.time import (
    days_until,
    next_quarterly_expiration,
    next_quarterly_month,
    refresh_carry_params,
    third_friday,
)

UTC = timezone.utc


class TestThirdFriday:
    """Test third Friday calculation"""

    @pytest.mark.parametrize("year,month,expected", [
        (2024, 3, date(2024, 3, 15)),     # month starts on a Friday
        (2026, 6, date(2026, 6, 19)),
        (2026, 9, date(2026, 9, 18)),
        (2026, 12, date(2026, 12, 18)),
        (2027, 3, date(2027, 3, 19)),
    ])
    def test_known_dates(self, year, month, expected):
        """Test against published expiration dates"""
        assert third_friday(year, month) == expected

    @pytest.mark.parametrize("year", [2024, 2025, 2026, 2027, 2028])
    @pytest.mark.parametrize("month", range(1, 13))
    def test_always_friday_in_third_week(self, year, month):
        """Test result is a Friday on day 15-21"""
        result = third_friday(year, month)
        assert result.weekday() == 4
        assert 15 <= result.day <= 21


class TestNextQuarterlyMonth:
    """Test quarterly month selection"""

    def test_before_quarter_month(self):
        """Test October rolls to December"""
        assert next_quarterly_month(2026, 10) == (2026, 12)

    def test_during_quarter_month(self):
        """Test an expiration month rolls to the following quarter"""
        assert next_quarterly_month(2026, 6) == (2026, 9)

    def test_december_wraps(self):
        """Test December wraps to March of the next year"""
        assert next_quarterly_month(2026, 12) == (2027, 3)


class TestNextExpiration:
    """Test next expiration and days remaining"""

    def test_reference_date(self):
        """Test from midnight 2026-10-18"""
        expiration = next_quarterly_expiration(datetime(2026, 10, 18, tzinfo=UTC))
        assert expiration.date == date(2026, 12, 18)
        assert expiration.days_remaining == 61
        assert expiration.iso_date == "2026-12-18"

    def test_partial_day_rounds_up(self):
        """Test a partial day counts as a whole day"""
        expiration = next_quarterly_expiration(datetime(2026, 10, 18, 15, 0, tzinfo=UTC))
        assert expiration.days_remaining == 61

    def test_on_expiration_day_rolls_forward(self):
        """Test the expiration day itself rolls to the next quarter"""
        expiration = next_quarterly_expiration(datetime(2026, 12, 18, 10, 0, tzinfo=UTC))
        assert expiration.date == date(2027, 3, 19)

    @pytest.mark.parametrize("offset", range(0, 400, 17))
    def test_expiration_properties(self, offset):
        """Test days >= 1, Friday, quarterly month"""
        now = datetime(2026, 1, 1, 9, 30, tzinfo=UTC) + timedelta(days=offset)
        expiration = next_quarterly_expiration(now)
        assert expiration.days_remaining >= 1
        assert expiration.date.weekday() == 4
        assert expiration.date.month in (3, 6, 9, 12)

    def test_days_until_floor(self):
        """Test days never drop below one"""
        assert days_until(date(2026, 12, 18), datetime(2026, 12, 18, 12, 0, tzinfo=UTC)) == 1


class TestRefreshCarryParams:
    """Test rolling carry params forward"""

    def test_unchanged_returns_same_object(self):
        """Test params already current are returned as-is"""
        params = CarryParams(4.5, 0.66, 1.13, 61, "2026-12-18")
        assert refresh_carry_params(params, datetime(2026, 10, 18, tzinfo=UTC)) is params

    def test_updates_days(self):
        """Test stale params get a new countdown"""
        params = CarryParams(4.5, 0.66, 1.13, 61, "2026-12-18")
        refreshed = refresh_carry_params(params, datetime(2026, 10, 28, tzinfo=UTC))
        assert refreshed.days_to_exp == 51
        assert refreshed.risk_free_rate == 4.5
        assert params.days_to_exp == 61
