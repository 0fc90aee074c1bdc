"""Tests for the forex calculator.

**Feature: trade-journal**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.calculator import PIP_VALUES, pip_value, position_size


class TestPipValue:
    def test_usd_account(self):
        assert pip_value("EURUSD", 1, 20) == pytest.approx(200.0)

    def test_converted_for_eur_account(self):
        assert pip_value("EURUSD", 2, 10, "EUR") == pytest.approx(200 / 1.167)

    def test_pair_is_case_insensitive(self):
        assert pip_value("xauusd", 1, 100) == pytest.approx(100.0)

    def test_unknown_pair(self):
        with pytest.raises(ValueError, match="Unknown pair"):
            pip_value("ABCXYZ", 1, 1)

    def test_unknown_currency(self):
        with pytest.raises(ValueError, match="Unsupported deposit currency"):
            pip_value("EURUSD", 1, 1, "JPY")


class TestPositionSize:
    def test_one_percent_risk(self):
        size = position_size("EURUSD", 10_000, 1, 20)

        assert size.risk_amount == pytest.approx(100.0)
        assert size.lot_size == pytest.approx(0.5)
        assert size.currency == "USD"

    def test_gbp_account(self):
        size = position_size("EURUSD", 10_000, 1, 20, "gbp")

        assert size.risk_amount == pytest.approx(100 / 1.206)
        assert size.lot_size == pytest.approx(0.5 / 1.206)
        assert size.currency == "GBP"

    @pytest.mark.parametrize("stop", [0, -5])
    def test_stop_loss_must_be_positive(self, stop):
        with pytest.raises(ValueError):
            position_size("EURUSD", 10_000, 1, stop)

    def test_negative_account_rejected(self):
        with pytest.raises(ValueError):
            position_size("EURUSD", -1, 1, 10)

    @given(
        pair=st.sampled_from(sorted(PIP_VALUES)),
        account=st.floats(min_value=100, max_value=1e6),
        risk=st.floats(min_value=0.1, max_value=5),
        stop=st.floats(min_value=1, max_value=500),
    )
    @settings(max_examples=50)
    def test_stop_out_loses_risk_amount(self, pair, account, risk, stop):
        """Losing the full stop at the computed size costs exactly the risk amount."""
        size = position_size(pair, account, risk, stop)

        assert pip_value(pair, size.lot_size, stop) == pytest.approx(size.risk_amount)
