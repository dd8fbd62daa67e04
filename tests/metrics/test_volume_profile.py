"""Tests for volume profile levels"""

import pytest

from basis_app.data.models import OHLCVBar
from basis_app.metrics.volume_profile import bin_volume, build_profile_set, calculate_volume_profile


def bar(open_, high, low, close, volume):
    return OHLCVBar(open=open_, high=high, low=low, close=close, volume=volume)


@pytest.fixture
def profile_bars():
    """Bars spanning 100-150 so fifty bins are one point wide"""
    return [
        bar(100, 101, 100, 101, 100),    # bin 0, all buying
        bar(124, 126, 124, 125, 1000),   # bin 25
        bar(125, 126, 125, 126, 500),    # bin 25
        bar(149, 150, 149, 149, 100),    # bin 49, all selling
    ]


class TestBinning:
    """Test price binning"""

    def test_bins_by_midpoint(self, profile_bars):
        """Test bars land in the bin of their midpoint"""
        min_price, bin_size, occupied = bin_volume(profile_bars, bins=50)
        assert min_price == 100
        assert bin_size == 1.0
        assert sorted(occupied) == [0, 25, 49]
        assert occupied[25].total == 1500

    def test_top_clamped_to_last_bin(self):
        """Test a midpoint at the maximum stays in range"""
        bars = [bar(100, 100, 100, 100, 10), bar(150, 150, 150, 150, 10)]
        _, _, occupied = bin_volume(bars, bins=50)
        assert sorted(occupied) == [0, 49]


class TestVolumeProfile:
    """Test POC, value area and imbalance levels"""

    def test_levels(self, profile_bars):
        """Test POC, VAH/VAL and imbalance levels"""
        profile = calculate_volume_profile(profile_bars)
        assert profile.poc == pytest.approx(125.5)
        assert profile.value_area_low == pytest.approx(125.0)
        assert profile.value_area_high == pytest.approx(126.0)
        assert profile.biggest_buyers_below == pytest.approx(100.5)
        assert profile.biggest_sellers_above == pytest.approx(149.5)

    def test_value_area_ordering(self, make_bars):
        """Test VAL <= POC <= VAH"""
        closes = [100, 104, 103, 108, 112, 109, 115, 111, 118, 120, 117, 122]
        volumes = [300, 900, 400, 1200, 500, 800, 2000, 600, 700, 1500, 400, 900]
        profile = calculate_volume_profile(make_bars(closes, volumes=volumes))
        assert profile.value_area_low <= profile.poc <= profile.value_area_high

    def test_value_area_captures_seventy_percent(self, make_bars):
        """Test volume of bars inside the value area reaches 70%"""
        closes = [100, 104, 103, 108, 112, 109, 115, 111, 118, 120, 117, 122]
        volumes = [300, 900, 400, 1200, 500, 800, 2000, 600, 700, 1500, 400, 900]
        bars = make_bars(closes, volumes=volumes)
        profile = calculate_volume_profile(bars)

        inside = sum(
            b.volume for b in bars
            if profile.value_area_low <= b.midpoint < profile.value_area_high
        )
        assert inside >= 0.7 * sum(volumes)

    def test_single_bar_has_no_imbalance_levels(self):
        """Test a one-bar profile has nothing outside the value area"""
        profile = calculate_volume_profile([bar(100, 110, 100, 105, 1000)])
        assert profile.value_area_low <= profile.poc <= profile.value_area_high
        assert profile.biggest_buyers_below == 0.0
        assert profile.biggest_sellers_above == 0.0

    def test_tie_goes_to_lower_bin(self):
        """Test equal-volume bins put the POC in the lower one"""
        bars = [bar(100, 101, 100, 101, 500), bar(149, 150, 149, 150, 500)]
        assert calculate_volume_profile(bars).poc == pytest.approx(100.5)

    def test_zero_volume(self):
        """Test zero volume still yields a POC inside the data"""
        bars = [bar(100, 101, 100, 101, 0), bar(149, 150, 149, 150, 0)]
        profile = calculate_volume_profile(bars)
        assert profile.poc == pytest.approx(100.5)
        assert profile.value_area_low == pytest.approx(100.0)
        assert profile.value_area_high == pytest.approx(101.0)

    def test_flat_prices(self):
        """Test zero price range uses a unit-width range"""
        profile = calculate_volume_profile([bar(100, 100, 100, 100, 1000)] * 3)
        assert profile.poc == pytest.approx(100.01)
        assert profile.value_area_low == pytest.approx(100.0)
        assert profile.value_area_high == pytest.approx(100.02)

    def test_empty(self):
        """Test empty input gives zeroed levels"""
        profile = calculate_volume_profile([])
        assert profile.poc == 0.0
        assert profile.value_area_high == 0.0


class TestProfileSet:
    """Test daily, weekly and monthly windows"""

    def test_windows_slice_tail(self, make_bars):
        """Test each profile uses the trailing window"""
        bars = make_bars(list(range(100, 130)), volumes=list(range(100, 130)))
        profiles = build_profile_set(bars)
        assert profiles.daily == calculate_volume_profile(bars[-1:])
        assert profiles.weekly == calculate_volume_profile(bars[-5:])
        assert profiles.monthly == calculate_volume_profile(bars[-22:])

    def test_empty(self):
        """Test empty input gives three zeroed profiles"""
        profiles = build_profile_set([])
        assert profiles.daily.poc == profiles.weekly.poc == profiles.monthly.poc == 0.0
