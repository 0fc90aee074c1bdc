"""Main CLI entry point for TradeJournal.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

import logging
from pathlib import Path
from typing import Optional

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.
    
    Command modules are only imported when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.
        
        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib
        
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)
        
        # Prefer a module attribute named after the command
        attr = getattr(module, cmd_name, None)
        if isinstance(attr, click.Command):
            cmd = attr
        else:
            cmd = None
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if isinstance(attr, click.Command) and attr.name == cmd_name:
                    cmd = attr
                    break
            
            if cmd is None:
                raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")
        
        self.add_command(cmd, cmd_name)
        return cmd


LAZY_SUBCOMMANDS = {
    "init": "tradejournal.cli.settings",
    # Journals and trades
    "journal": "tradejournal.cli.journal",
    "add": "tradejournal.cli.trades",
    "edit": "tradejournal.cli.trades",
    "remove": "tradejournal.cli.trades",
    "trades": "tradejournal.cli.trades",
    # Analytics
    "insights": "tradejournal.cli.insights",
    "performance": "tradejournal.cli.insights",
    "risk": "tradejournal.cli.insights",
    "calendar": "tradejournal.cli.insights",
    # Calculator
    "calc": "tradejournal.cli.calc",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/tradejournal/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """TradeJournal - log trades and review your performance.
    
    Record trades in named journals, then review win rate, expectancy,
    streaks, session breakdowns and coaching tips.
    
    \b
    Quick Start:
      tradejournal init                    # Create a config file
      tradejournal journal create Main     # Create a journal
      tradejournal add -j Main --amount 120 --outcome win
      tradejournal insights -j Main        # Review your insights
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Settings are loaded on first use by the commands that need them
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
