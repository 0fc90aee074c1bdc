"""Forex calculator module."""

from tradejournal.calculator.forex import (
    CURRENCY_SYMBOLS,
    DEPOSIT_RATES,
    PIP_VALUES,
    PositionSize,
    pip_value,
    position_size,
)

__all__ = [
    "CURRENCY_SYMBOLS",
    "DEPOSIT_RATES",
    "PIP_VALUES",
    "PositionSize",
    "pip_value",
    "position_size",
]
