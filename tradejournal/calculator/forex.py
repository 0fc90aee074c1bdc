"""Forex pip-value and position-size calculations.

Pip values are quoted per standard lot in USD. Results for EUR and GBP
accounts are converted with the fixed rates in DEPOSIT_RATES.
"""

from pydantic import BaseModel, Field

DEPOSIT_RATES = {
    "USD": 1.0,
    "EUR": 1.167,
    "GBP": 1.206,
}

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

# Pip value per standard lot, in USD
PIP_VALUES = {
    "EURUSD": 10.0,
    "AUDCAD": 7.12845,
    "AUDCHF": 12.60891,
    "AUDJPY": 6.63354,
    "AUDUSD": 10.0,
    "CADCHF": 12.60891,
    "CADJPY": 6.63354,
    "CHFJPY": 6.63354,
    "EURAUD": 6.4962,
    "EURCAD": 7.12845,
    "EURCHF": 12.60891,
    "EURGBP": 13.4178,
    "EURHKD": 1.2875,
    "EURJPY": 6.63354,
    "EURNOK": 0.99492,
    "EURNZD": 5.7333,
    "EURPLN": 2.75069,
    "EURSEK": 1.06067,
    "EURTRY": 0.23835,
    "GBPAUD": 6.4962,
    "GBPCAD": 7.12845,
    "GBPCHF": 12.60891,
    "GBPJPY": 6.63354,
    "GBPNZD": 5.7333,
    "GBPPLN": 2.75069,
    "GBPSEK": 1.06067,
    "GBPUSD": 10.0,
    "NZDCAD": 7.12845,
    "NZDCHF": 12.60891,
    "NZDJPY": 6.63354,
    "NZDUSD": 10.0,
    "USDCAD": 7.12845,
    "USDCHF": 12.60891,
    "USDJPY": 6.63354,
    "USDHKD": 1.2875,
    "USDZAR": 0.57737,
    "XAUUSD": 1.0,
    "XAGUSD": 50.0,
}


class PositionSize(BaseModel):
    """Lot size that risks a given share of the account."""

    lot_size: float = Field(..., ge=0, description="Position size in standard lots")
    risk_amount: float = Field(..., ge=0, description="Amount at risk in deposit currency")
    currency: str = Field(..., description="Deposit currency code")

    model_config = {"frozen": True}


def _pip_value(pair: str) -> float:
    try:
        return PIP_VALUES[pair.upper()]
    except KeyError:
        raise ValueError(f"Unknown pair: {pair}") from None


def _deposit_rate(currency: str) -> float:
    try:
        return DEPOSIT_RATES[currency.upper()]
    except KeyError:
        raise ValueError(f"Unsupported deposit currency: {currency}") from None


def pip_value(pair: str, lots: float, pips: float, deposit_currency: str = "USD") -> float:
    """Value of a pip move for a position, in the deposit currency.

    Args:
        pair: Instrument symbol, e.g. "EURUSD".
        lots: Position size in standard lots.
        pips: Number of pips moved.
        deposit_currency: Account currency (USD, EUR or GBP).

    Returns:
        Profit or loss for the move.
    """
    value = _pip_value(pair) * lots * pips
    return value / _deposit_rate(deposit_currency)


def position_size(
    pair: str,
    account_size: float,
    risk_percent: float,
    stop_loss_pips: float,
    deposit_currency: str = "USD",
) -> PositionSize:
    """Lot size that loses ``risk_percent`` of the account at the stop.

    Raises:
        ValueError: For an unknown pair or currency, a non-positive stop
            loss, or a negative account size or risk percent.
    """
    if stop_loss_pips <= 0:
        raise ValueError(f"Stop loss must be positive, got {stop_loss_pips}")
    if account_size < 0 or risk_percent < 0:
        raise ValueError("Account size and risk percent must not be negative")

    per_pip = _pip_value(pair)
    rate = _deposit_rate(deposit_currency)

    risk_amount = account_size * risk_percent / 100
    lot_size = risk_amount / (stop_loss_pips * per_pip)

    return PositionSize(
        lot_size=lot_size / rate,
        risk_amount=risk_amount / rate,
        currency=deposit_currency.upper(),
    )
