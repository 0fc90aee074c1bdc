"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including journal management, trade logging, insights and calculators.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
