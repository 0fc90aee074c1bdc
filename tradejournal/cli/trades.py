"""Trade commands for TradeJournal CLI.

Handles adding, editing, removing and listing trades in a journal.
"""

from datetime import datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    fail,
    get_store,
    journal_option,
    money,
    resolve_journal,
)

DIRECTIONS = ["Buy", "Sell"]
QUALITIES = ["A+", "A", "B", "C"]
SESSIONS = ["London", "New York", "Asian"]


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date or datetime string."""
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(
            f"Invalid date: {value}. Use YYYY-MM-DD or YYYY-MM-DDTHH:MM",
            param_hint="--date",
        ) from None


def _validation_message(error: ValidationError) -> str:
    return "\n".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in error.errors()
    )


@click.command()
@journal_option
@click.option("--amount", type=float, required=True, help="Trade amount (unsigned).")
@click.option(
    "--outcome",
    type=click.Choice(["win", "loss"], case_sensitive=False),
    required=True,
    help="Whether the trade won or lost.",
)
@click.option("--date", "trade_date", type=str, default=None, help="Trade date (default: now).")
@click.option("--pair", type=str, default=None, help="Instrument, e.g. EURUSD.")
@click.option("--direction", type=click.Choice(DIRECTIONS), default=None, help="Trade direction.")
@click.option("--quality", type=click.Choice(QUALITIES), default=None, help="Setup grade.")
@click.option("--session", type=str, default=None, help="Trading session (London, New York, Asian).")
@click.option("--reason", type=str, default=None, help="Why you took the trade.")
@click.option("--before-image", type=str, default=None, help="Screenshot URL before entry.")
@click.option("--after-image", type=str, default=None, help="Screenshot URL after exit.")
@click.pass_context
def add(
    ctx: click.Context,
    journal: Optional[str],
    amount: float,
    outcome: str,
    trade_date: Optional[str],
    pair: Optional[str],
    direction: Optional[str],
    quality: Optional[str],
    session: Optional[str],
    reason: Optional[str],
    before_image: Optional[str],
    after_image: Optional[str],
) -> None:
    """Log a trade in a journal.
    
    \b
    Examples:
      tradejournal add -j Main --amount 120 --outcome win --pair EURUSD
      tradejournal add -j Main --amount 80 --outcome loss --session Asian \\
          --reason "Breakout failed" --date 2024-03-01T09:30
    """
    from tradejournal.models import Trade

    store = get_store(ctx)
    target = resolve_journal(ctx, store, journal)

    try:
        trade = Trade.from_entry(
            amount,
            outcome,
            date=_parse_date(trade_date) or datetime.now(),
            pair=pair,
            direction=direction,
            quality=quality,
            session=session,
            reason=reason,
            before_image_url=before_image,
            after_image_url=after_image,
        )
    except ValidationError as e:
        fail(_validation_message(e), title="Invalid Trade")

    saved = store.add_trade(target.id, trade)

    console.print(Panel(
        f"[bold]Trade #{saved.id}[/bold] logged in [bold]{target.name}[/bold]\n\n"
        f"Result: {money(saved.result)}\n"
        f"Date:   {saved.date.strftime('%Y-%m-%d %H:%M')}",
        title="[bold cyan]Trade Added[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("trade_id", type=int)
@click.option("--result", type=float, default=None, help="New signed result.")
@click.option("--date", "trade_date", type=str, default=None, help="New trade date.")
@click.option("--pair", type=str, default=None, help="New instrument.")
@click.option("--direction", type=click.Choice(DIRECTIONS), default=None, help="New direction.")
@click.option("--quality", type=click.Choice(QUALITIES), default=None, help="New setup grade.")
@click.option("--session", type=str, default=None, help="New session.")
@click.option("--reason", type=str, default=None, help="New reason.")
@click.option("--before-image", type=str, default=None, help="New screenshot URL before entry.")
@click.option("--after-image", type=str, default=None, help="New screenshot URL after exit.")
@click.pass_context
def edit(
    ctx: click.Context,
    trade_id: int,
    result: Optional[float],
    trade_date: Optional[str],
    pair: Optional[str],
    direction: Optional[str],
    quality: Optional[str],
    session: Optional[str],
    reason: Optional[str],
    before_image: Optional[str],
    after_image: Optional[str],
) -> None:
    """Update fields of trade TRADE_ID.
    
    Only the options you pass are changed.
    
    \b
    Examples:
      tradejournal edit 12 --result -45.5
      tradejournal edit 12 --session "New York" --quality A
    """
    from tradejournal.db.store import TradeNotFoundError

    store = get_store(ctx)
    try:
        updated = store.update_trade(
            trade_id,
            result=result,
            date=_parse_date(trade_date),
            pair=pair,
            direction=direction,
            quality=quality,
            session=session,
            reason=reason,
            before_image_url=before_image,
            after_image_url=after_image,
        )
    except TradeNotFoundError as e:
        fail(str(e))
    except ValidationError as e:
        fail(_validation_message(e), title="Invalid Trade")

    console.print(f"[green]Updated trade #{trade_id}[/green] result {money(updated.result)}")


@click.command()
@click.argument("trade_id", type=int)
@click.pass_context
def remove(ctx: click.Context, trade_id: int) -> None:
    """Delete trade TRADE_ID."""
    from tradejournal.db.store import TradeNotFoundError

    store = get_store(ctx)
    try:
        store.delete_trade(trade_id)
    except TradeNotFoundError as e:
        fail(str(e))

    console.print(f"[green]Deleted trade #{trade_id}[/green]")


@click.command()
@journal_option
@click.option("--days", type=int, default=None, help="Only show the last N days.")
@click.pass_context
def trades(ctx: click.Context, journal: Optional[str], days: Optional[int]) -> None:
    """List the trades in a journal.
    
    \b
    Examples:
      tradejournal trades -j Main
      tradejournal trades -j Main --days 7
    """
    from datetime import date, timedelta

    store = get_store(ctx)
    target = resolve_journal(ctx, store, journal)
    rows = store.get_trades(target.id)

    if days is not None:
        from_date = date.today() - timedelta(days=days)
        rows = [t for t in rows if t.date.date() >= from_date]

    if not rows:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title=f"[bold]{target.name}[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title=f"{target.name} - Trades", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="dim")
    table.add_column("Pair", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Quality", justify="center")
    table.add_column("Session")
    table.add_column("Result", justify="right")
    table.add_column("Reason", max_width=30)

    total = 0.0
    for trade in rows:
        side_color = "green" if trade.direction == "Buy" else "red"
        table.add_row(
            str(trade.id),
            trade.date.strftime("%Y-%m-%d %H:%M"),
            trade.pair or "-",
            f"[{side_color}]{trade.direction}[/{side_color}]" if trade.direction else "-",
            trade.quality or "-",
            trade.session or "-",
            money(trade.result),
            trade.reason or "-",
        )
        total += trade.result

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(rows)}")
    console.print(f"[bold]Total P&L:[/bold] {money(total)}")
