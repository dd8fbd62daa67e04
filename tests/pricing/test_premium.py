"""Tests for futures premium analysis"""

import pytest

from basis_app.config.defaults import ContractParams
from basis_app.data.models import InstrumentClass
from basis_app.pricing.premium import contract_multiplier, premium_info, round_half_up


class TestRoundHalfUp:
    """Test display rounding"""

    def test_rounds_half_up(self):
        """Test halves round toward positive infinity"""
        assert round_half_up(2.5, 0) == 3.0
        assert round_half_up(-2.5, 0) == -2.0

    def test_places(self):
        """Test rounding to a number of decimal places"""
        assert round_half_up(0.474547, 4) == 0.4745
        assert round_half_up(122.188708, 2) == 122.19


class TestPremiumInfo:
    """Test premium calculations"""

    def test_nq_premium(self, carry_params):
        """Test NQ premium over NDX with the 20x multiplier"""
        info = premium_info(25748.49, 25993.25, InstrumentClass.NQ, carry_params)

        assert info.theoretical == 25870.68
        assert info.points == 122.19
        assert info.percent == 0.4745
        assert info.dollars == 2443.77
        assert info.actual == 25993.25

    def test_es_premium(self, carry_params):
        """Test ES premium over SPX with the 50x multiplier"""
        info = premium_info(5950.0, 5961.9, InstrumentClass.ES, carry_params)

        assert info.points == 24.77
        assert info.percent == 0.4163
        assert info.dollars == 1238.62
        assert info.theoretical == 5974.77

    def test_custom_contracts(self, carry_params):
        """Test multiplier override"""
        contracts = ContractParams(nq_multiplier=2.0)
        info = premium_info(25748.49, 25993.25, InstrumentClass.NQ, carry_params, contracts)
        assert info.dollars == pytest.approx(244.38, abs=0.01)

    def test_contract_multipliers(self):
        """Test default contract multipliers"""
        assert contract_multiplier(InstrumentClass.NQ) == 20.0
        assert contract_multiplier(InstrumentClass.ES) == 50.0
        assert contract_multiplier(InstrumentClass.GC) == 100.0
