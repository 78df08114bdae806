"""CLI commands for TradeBias.

This package provides the command-line interface for analyzing
trade logs and listing the bias rule thresholds.
"""

from tradebias.cli.main import cli, main

__all__ = ["cli", "main"]
