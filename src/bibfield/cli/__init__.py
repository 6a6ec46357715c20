"""Command-line interface for bibfield."""

from bibfield.cli.main import cli

__all__ = ["cli"]
