"""Forex calculator commands for TradeJournal CLI."""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.calculator.forex import CURRENCY_SYMBOLS, DEPOSIT_RATES, PIP_VALUES
from tradejournal.cli.common import console, fail, get_settings

PAIR_CHOICE = click.Choice(sorted(PIP_VALUES), case_sensitive=False)
CURRENCY_CHOICE = click.Choice(sorted(DEPOSIT_RATES), case_sensitive=False)


def _currency(ctx: click.Context, currency: Optional[str]) -> str:
    return (currency or get_settings(ctx).calculator.deposit_currency).upper()


@click.group()
def calc() -> None:
    """Pip value and position size calculators.
    
    \b
    Examples:
      tradejournal calc pip --pair EURUSD --lots 1 --pips 20
      tradejournal calc risk --pair GBPJPY --account 10000 --risk 1 --stop 25
    """


@calc.command("pip")
@click.option("--pair", type=PAIR_CHOICE, default="EURUSD", help="Instrument (default: EURUSD).")
@click.option("--lots", type=float, required=True, help="Position size in standard lots.")
@click.option("--pips", type=float, required=True, help="Pips moved.")
@click.option("--currency", type=CURRENCY_CHOICE, default=None, help="Deposit currency.")
@click.pass_context
def pip(ctx: click.Context, pair: str, lots: float, pips: float, currency: Optional[str]) -> None:
    """Value of a pip move for a position."""
    from tradejournal.calculator import pip_value

    deposit = _currency(ctx, currency)
    try:
        value = pip_value(pair, lots, pips, deposit)
    except ValueError as e:
        fail(str(e))

    symbol = CURRENCY_SYMBOLS.get(deposit, "")
    console.print(Panel(
        f"{pair.upper()}  {lots:g} lot(s) x {pips:g} pip(s)\n\n"
        f"[bold]Value:[/bold] [green]{symbol}{value:,.2f}[/green] {deposit}",
        title="[bold cyan]Pip Calculator[/bold cyan]",
        border_style="cyan",
    ))


@calc.command("risk")
@click.option("--pair", type=PAIR_CHOICE, default="EURUSD", help="Instrument (default: EURUSD).")
@click.option("--account", "account_size", type=float, required=True, help="Account size.")
@click.option("--risk", "risk_percent", type=float, required=True, help="Risk per trade, in percent.")
@click.option("--stop", "stop_loss_pips", type=float, required=True, help="Stop loss distance in pips.")
@click.option("--currency", type=CURRENCY_CHOICE, default=None, help="Deposit currency.")
@click.pass_context
def risk_size(
    ctx: click.Context,
    pair: str,
    account_size: float,
    risk_percent: float,
    stop_loss_pips: float,
    currency: Optional[str],
) -> None:
    """Lot size that risks a set percentage of the account."""
    from tradejournal.calculator import position_size

    deposit = _currency(ctx, currency)
    try:
        size = position_size(pair, account_size, risk_percent, stop_loss_pips, deposit)
    except ValueError as e:
        fail(str(e))

    symbol = CURRENCY_SYMBOLS.get(size.currency, "")
    console.print(Panel(
        f"{pair.upper()}  {risk_percent:g}% of {symbol}{account_size:,.2f}, "
        f"stop {stop_loss_pips:g} pips\n\n"
        f"[bold]Lot Size:[/bold]    [green]{size.lot_size:.2f}[/green]\n"
        f"[bold]Risk Amount:[/bold] [yellow]{symbol}{size.risk_amount:,.2f}[/yellow]",
        title="[bold cyan]Position Size[/bold cyan]",
        border_style="cyan",
    ))
