"""Analytics commands for TradeJournal CLI.

Shows the insight report, performance views, the monthly P&L calendar
and the daily risk monitor for a journal.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    fail,
    get_settings,
    get_store,
    journal_option,
    money,
    resolve_journal,
)


def _load_trades(ctx: click.Context, journal: Optional[str]):
    store = get_store(ctx)
    target = resolve_journal(ctx, store, journal)
    return target, store.get_trades(target.id)


def _bullets(items: list[str]) -> str:
    return "\n".join(f"• {item}" for item in items) if items else "[dim]Nothing to flag[/dim]"


@click.command()
@journal_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw report as JSON.")
@click.pass_context
def insights(ctx: click.Context, journal: Optional[str], as_json: bool) -> None:
    """Show win rate, expectancy, streaks and coaching tips.
    
    \b
    Examples:
      tradejournal insights -j Main
      tradejournal insights -j Main --json
    """
    from tradejournal.insights import analyze_trades
    from tradejournal.performance import best_session, goal_progress

    target, rows = _load_trades(ctx, journal)
    report = analyze_trades(rows)

    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return

    if report.total == 0:
        console.print(Panel(
            "[dim]No trades yet - log some with [cyan]tradejournal add[/cyan][/dim]",
            title=f"[bold]{target.name} Insights[/bold]",
            border_style="dim",
        ))
        return

    best = best_session(report.session_counts)
    best_text = f"{best[0]} ({round(best[1] * 100)}%)" if best else "-"

    summary = (
        f"[bold]Trades:[/bold] {report.total}  "
        f"[green]{report.wins}W[/green] / [red]{report.losses}L[/red]\n\n"
        f"Win Rate:      {report.win_rate:.1f}% "
        f"[dim](target {report.goals.win_rate_target:g}%, "
        f"{goal_progress(report):.0f}% of goal)[/dim]\n"
        f"Expectancy:    {money(report.expectancy)} "
        f"[dim](target ${report.goals.expectancy_target:g})[/dim]\n"
        f"Avg Win:       {money(report.avg_win)}\n"
        f"Avg Loss:      {money(report.avg_loss)}\n"
        f"Best Day:      {money(report.max_daily_profit)}\n"
        f"Worst Day:     {money(report.max_daily_loss)}\n"
        f"Win Streak:    {report.longest_win_streak}\n"
        f"Loss Streak:   {report.longest_loss_streak}\n"
        f"Best Session:  {best_text}"
    )
    if report.tags:
        summary += "\n\n" + "  ".join(f"[bold cyan]\\[{tag}][/bold cyan]" for tag in report.tags)

    console.print(Panel(
        summary,
        title=f"[bold cyan]{target.name} Insights[/bold cyan]",
        border_style="cyan",
    ))

    if report.top_reasons:
        reasons = Table(title="Top Reasons", show_header=True, header_style="bold cyan")
        reasons.add_column("Reason")
        reasons.add_column("Count", justify="right")
        for item in report.top_reasons:
            reasons.add_row(item.reason, str(item.count))
        console.print(reasons)

    console.print(Panel(
        _bullets(report.recommendations),
        title="[bold]Recommendations[/bold]",
        border_style="yellow",
    ))
    console.print(Panel(
        _bullets(report.mindset),
        title="[bold]Mindset[/bold]",
        border_style="magenta",
    ))


@click.command()
@journal_option
@click.option("--points", type=int, default=10, help="Equity curve points to show (default: 10).")
@click.pass_context
def performance(ctx: click.Context, journal: Optional[str], points: int) -> None:
    """Show session, setup, buy/sell and equity performance.
    
    \b
    Examples:
      tradejournal performance -j Main
      tradejournal performance -j Main --points 20
    """
    from tradejournal.performance import (
        biggest_loss,
        biggest_profit,
        direction_activity,
        equity_curve,
        session_performance,
        setup_distribution,
    )

    target, rows = _load_trades(ctx, journal)

    if not rows:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title=f"[bold]{target.name} Performance[/bold]",
            border_style="dim",
        ))
        return

    sessions = Table(title="Session Performance", show_header=True, header_style="bold cyan")
    sessions.add_column("Session", style="bold")
    sessions.add_column("Wins", justify="right", style="green")
    sessions.add_column("Losses", justify="right", style="red")
    sessions.add_column("Total", justify="right")
    sessions.add_column("Win Rate", justify="right")
    for row in session_performance(rows):
        rate_color = "green" if row.win_rate >= 60 else "yellow" if row.win_rate >= 40 else "red"
        sessions.add_row(
            row.session,
            str(row.wins),
            str(row.losses),
            str(row.total),
            f"[{rate_color}]{row.win_rate}%[/{rate_color}]",
        )
    console.print(sessions)

    setups = Table(title="Setup Quality", show_header=True, header_style="bold cyan")
    setups.add_column("Setup", style="bold")
    setups.add_column("Share", justify="right")
    for share in setup_distribution(rows):
        setups.add_row(share.setup, f"{share.percentage:.1f}%")
    console.print(setups)

    activity = [a for a in direction_activity(rows) if a.buys or a.sells]
    if activity:
        sides = Table(title="Buy/Sell Activity", show_header=True, header_style="bold cyan")
        sides.add_column("Day", style="dim")
        sides.add_column("Buys", justify="right", style="green")
        sides.add_column("Sells", justify="right", style="red")
        for entry in activity[-points:]:
            sides.add_row(entry.day.isoformat(), str(entry.buys), str(entry.sells))
        console.print(sides)

    highlights = []
    best = biggest_profit(rows)
    worst = biggest_loss(rows)
    if best:
        highlights.append(
            f"Biggest Profit: {money(best.result)} "
            f"[dim]{best.pair or ''} {best.date.strftime('%Y-%m-%d')}[/dim]"
        )
    if worst:
        highlights.append(
            f"Biggest Loss:   {money(worst.result)} "
            f"[dim]{worst.pair or ''} {worst.date.strftime('%Y-%m-%d')}[/dim]"
        )

    curve = equity_curve(rows)
    highlights.append("\n[bold]Equity Curve:[/bold]")
    for point in curve[-points:]:
        highlights.append(
            f"  #{point.index:<4} {point.date.strftime('%Y-%m-%d')}  {money(point.equity)}"
        )

    console.print(Panel(
        "\n".join(highlights),
        title=f"[bold cyan]{target.name} Highlights[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@journal_option
@click.option("--goal", type=float, default=None, help="Daily max loss (default: from config).")
@click.option("--date", "day", type=str, default=None, help="Day to check, YYYY-MM-DD (default: today).")
@click.pass_context
def risk(ctx: click.Context, journal: Optional[str], goal: Optional[float], day: Optional[str]) -> None:
    """Check the day's P&L against your daily loss goal.
    
    \b
    Examples:
      tradejournal risk -j Main
      tradejournal risk -j Main --goal 300 --date 2024-03-01
    """
    from datetime import date

    from tradejournal.insights import analyze_trades
    from tradejournal.performance import RiskLevel, risk_status

    settings = get_settings(ctx)
    goal = goal if goal is not None else settings.risk.daily_loss_goal

    check_day = None
    if day:
        try:
            check_day = date.fromisoformat(day)
        except ValueError:
            fail(f"Invalid date format: {day}. Use YYYY-MM-DD")

    target, rows = _load_trades(ctx, journal)

    try:
        status = risk_status(rows, goal=goal, day=check_day)
    except ValueError as e:
        fail(str(e))

    report = analyze_trades(rows)

    color = {
        RiskLevel.SAFE: "green",
        RiskLevel.WARNING: "yellow",
        RiskLevel.BREACHED: "red",
    }[status.level]

    filled = int(status.risk_used / 5)
    bar = f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (20 - filled)}[/dim]"

    usage = (
        "[bold red]Daily risk limit breached![/bold red]"
        if status.level is RiskLevel.BREACHED
        else f"Using {status.risk_used:.1f}% of max loss (${status.goal:,.2f})"
    )

    text = (
        f"[bold]{status.day.isoformat()}[/bold]  Daily P&L: {money(status.daily_pnl)}\n\n"
        f"{bar}\n{usage}\n\n"
        f"Win Rate: {report.win_rate:.1f}%   Trades: {report.total}\n\n"
        f"[{color}]{status.message}[/{color}]"
    )

    console.print(Panel(
        text,
        title=f"[bold {color}]{target.name} Risk Monitor[/bold {color}]",
        border_style=color,
    ))


@click.command()
@journal_option
@click.option("--month", type=str, default=None, help="Month to show, YYYY-MM (default: this month).")
@click.pass_context
def calendar(ctx: click.Context, journal: Optional[str], month: Optional[str]) -> None:
    """Show a month of daily P&L as a calendar.
    
    \b
    Examples:
      tradejournal calendar -j Main
      tradejournal calendar -j Main --month 2024-03
    """
    from datetime import date, datetime

    from tradejournal.performance import monthly_calendar

    if month:
        try:
            first = datetime.strptime(month, "%Y-%m").date()
        except ValueError:
            fail(f"Invalid month format: {month}. Use YYYY-MM")
    else:
        first = date.today().replace(day=1)

    target, rows = _load_trades(ctx, journal)

    try:
        weeks = monthly_calendar(rows, first.year, first.month)
    except (ValueError, OverflowError) as e:
        fail(str(e))

    table = Table(
        title=f"{target.name} - {first.strftime('%B %Y')}",
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
        table.add_column(name, justify="center", min_width=8)

    month_total = 0.0
    for week in weeks:
        cells = []
        for cell in week:
            if cell is None:
                cells.append("")
            elif cell.trades:
                month_total += cell.pnl
                cells.append(f"[bold]{cell.day.day}[/bold]\n{money(cell.pnl)}\n[dim]{cell.trades}T[/dim]")
            else:
                cells.append(f"[dim]{cell.day.day}[/dim]")
        table.add_row(*cells)

    console.print(table)
    console.print(f"\n[bold]Month P&L:[/bold] {money(month_total)}")
