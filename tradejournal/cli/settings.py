"""Settings commands for TradeJournal CLI."""

import click
from rich.panel import Panel

from tradejournal.cli.common import console


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create a template configuration file.
    
    \b
    Examples:
      tradejournal init
      tradejournal --config ./config.toml init --force
    """
    from tradejournal.config import create_template_config, get_config_path

    config_path = get_config_path(ctx.obj.get("config_path"))

    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] {config_path}\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Init[/bold yellow]",
            border_style="yellow",
        ))
        return

    written = create_template_config(config_path)
    console.print(Panel(
        f"[green]Config written to[/green] {written}\n\n"
        "Edit it to set your default journal and daily loss goal.",
        title="[bold cyan]Init[/bold cyan]",
        border_style="cyan",
    ))
