"""Output formatting for CLI commands."""

from gutenreader.output.formatter import OutputFormatter, get_formatter

__all__ = ["OutputFormatter", "get_formatter"]
