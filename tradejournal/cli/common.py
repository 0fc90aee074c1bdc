"""Helpers shared by the CLI command modules."""

from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.panel import Panel

console = Console()


def fail(message: str, title: str = "Error") -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def get_settings(ctx: click.Context):
    """Load settings once per invocation and cache them on the context."""
    from tradejournal.config import ConfigError, load_settings

    obj = ctx.ensure_object(dict)
    if "settings" not in obj:
        try:
            obj["settings"] = load_settings(obj.get("config_path"))
        except ConfigError as e:
            fail(str(e), title="Configuration Error")
    return obj["settings"]


def get_store(ctx: click.Context):
    """Open the journal store configured for this invocation."""
    from tradejournal.db.store import JournalStore

    settings = get_settings(ctx)
    return JournalStore(settings.journal.db_path)


def resolve_journal(ctx: click.Context, store, journal: Optional[str]):
    """Find a journal by ID or name, falling back to the configured default.

    Exits with an error panel when no journal matches.
    """
    from tradejournal.db.store import JournalNotFoundError

    ref = journal or get_settings(ctx).journal.default_journal
    if not ref:
        fail(
            "No journal selected.\n\n"
            "Pass [cyan]--journal[/cyan] or set [cyan]default_journal[/cyan] in config.toml.",
            title="Journal Required",
        )

    if ref.isdigit():
        try:
            return store.get_journal(int(ref))
        except JournalNotFoundError:
            pass

    found = store.find_journal(ref)
    if found is None:
        fail(f"Journal '{ref}' not found")
    return found


def money(value: float, symbol: str = "$") -> str:
    """Format a signed amount with rich colour markup."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{symbol}{abs(value):,.2f}[/{color}]"


journal_option = click.option(
    "--journal",
    "-j",
    "journal",
    type=str,
    default=None,
    help="Journal ID or name (default: default_journal from config).",
)
