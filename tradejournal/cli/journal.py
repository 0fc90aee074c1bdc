"""Journal management commands for TradeJournal CLI."""

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, get_store


@click.group()
def journal() -> None:
    """Create, list and delete journals.
    
    \b
    Examples:
      tradejournal journal create "Prop Account"
      tradejournal journal list
      tradejournal journal delete 2
    """


@journal.command("create")
@click.argument("name")
@click.pass_context
def create_journal(ctx: click.Context, name: str) -> None:
    """Create a new journal called NAME."""
    from tradejournal.db.store import DuplicateJournalError

    store = get_store(ctx)
    try:
        created = store.create_journal(name)
    except (ValueError, DuplicateJournalError) as e:
        fail(str(e))

    console.print(Panel(
        f"[green]Created journal[/green] [bold]{created.name}[/bold] (ID {created.id})",
        title="[bold cyan]Journal[/bold cyan]",
        border_style="cyan",
    ))


@journal.command("list")
@click.pass_context
def list_journals(ctx: click.Context) -> None:
    """List all journals with their trade counts."""
    store = get_store(ctx)
    journals = store.get_journals()

    if not journals:
        console.print(Panel(
            "[dim]No journals yet[/dim]\n\n"
            "Run [cyan]tradejournal journal create NAME[/cyan] to start one.",
            title="[bold]Journals[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Journals", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("Created", style="dim")

    for entry in journals:
        table.add_row(
            str(entry.id),
            entry.name,
            str(entry.trade_count),
            entry.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@journal.command("delete")
@click.argument("journal_id", type=int)
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_context
def delete_journal(ctx: click.Context, journal_id: int, yes: bool) -> None:
    """Delete journal JOURNAL_ID and all of its trades."""
    from tradejournal.db.store import JournalNotFoundError

    store = get_store(ctx)
    try:
        target = store.get_journal(journal_id)
    except JournalNotFoundError as e:
        fail(str(e))

    if not yes:
        click.confirm(
            f"Delete journal '{target.name}' and its {target.trade_count} trades?",
            abort=True,
        )

    store.delete_journal(journal_id)
    console.print(f"[green]Deleted journal[/green] [bold]{target.name}[/bold]")
