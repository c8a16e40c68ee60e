"""
Command-line interface for gemimg.

This package contains CLI implementations using Click.
Uses only the public API: from gemimg import ...
"""

from gemimg.cli.commands import cli, main

__all__ = ["cli", "main"]
