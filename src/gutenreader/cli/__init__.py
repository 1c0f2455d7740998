"""Command-line interface for Gutenreader."""
