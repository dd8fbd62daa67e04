"""Tests for bar validation"""

import math

import pytest

from basis_app.data.models import OHLCVBar
from basis_app.data.validators import split_valid_bars, validate_bar, validate_bars
from basis_app.errors import MalformedDataError


class TestValidateBar:
    """Test single bar validation"""

    def test_valid_bar(self):
        """Test a consistent bar passes"""
        validate_bar(OHLCVBar(open=100, high=105, low=99, close=103, volume=1000))

    def test_high_below_close(self):
        """Test high below close is rejected"""
        with pytest.raises(MalformedDataError):
            validate_bar(OHLCVBar(open=100, high=101, low=99, close=103, volume=1000))

    def test_low_above_open(self):
        """Test low above open is rejected"""
        with pytest.raises(MalformedDataError):
            validate_bar(OHLCVBar(open=98, high=105, low=99, close=103, volume=1000))

    def test_negative_volume(self):
        """Test negative volume is rejected"""
        with pytest.raises(MalformedDataError, match="Negative volume"):
            validate_bar(OHLCVBar(open=100, high=105, low=99, close=103, volume=-1))

    def test_nan_price(self):
        """Test NaN prices are rejected"""
        with pytest.raises(MalformedDataError):
            validate_bar(OHLCVBar(open=100, high=105, low=99, close=math.nan, volume=1))


class TestValidateBars:
    """Test series validation"""

    def test_ascending_dates(self, make_bars):
        """Test a chronological series passes"""
        validate_bars(make_bars([100, 101, 102]))

    def test_out_of_order(self):
        """Test descending dates are rejected"""
        bars = [
            OHLCVBar(open=100, high=101, low=99, close=100, volume=1, date="2026-01-02"),
            OHLCVBar(open=100, high=101, low=99, close=100, volume=1, date="2026-01-01"),
        ]
        with pytest.raises(MalformedDataError, match="out of order"):
            validate_bars(bars)


class TestSplitValidBars:
    """Test per-bar filtering"""

    def test_drops_only_bad_bars(self, make_bars):
        """Test inconsistent bars are removed and the rest keep their order"""
        bars = make_bars([100, 101, 102, 103])
        bad = OHLCVBar(open=105, high=104, low=103, close=104, volume=10, date="2026-01-03")

        valid, errors = split_valid_bars([bars[0], bars[1], bad, bars[2], bars[3]])

        assert valid == bars
        assert len(errors) == 1
        assert "High price" in str(errors[0])

    def test_all_valid(self, make_bars):
        bars = make_bars([100, 101])
        assert split_valid_bars(bars) == (bars, [])
