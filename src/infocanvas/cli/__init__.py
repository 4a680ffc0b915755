"""
Command-line interface for infocanvas.

This package contains the CLI implementation using Click.
Uses only the public API: from infocanvas import ...
"""

from infocanvas.cli.commands import cli, main

__all__ = ["cli", "main"]
