"""
Utility functions for the CLI.

Exit code constants and parsing helpers for command options.
"""

import click

# Exit codes
EXIT_SUCCESS = 0
EXIT_API_OR_NETWORK = 1
EXIT_VALIDATION_OR_CONFIG = 2


def parse_region(value: str) -> tuple[float, float, float, float]:
    """Parse an 'X,Y,W,H' percentage string into four floats."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 4:
        raise click.BadParameter("expected four comma-separated numbers: X,Y,W,H")
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError as e:
        raise click.BadParameter(f"not a number in {value!r}") from e
    return x, y, w, h


__all__ = [
    "EXIT_SUCCESS",
    "EXIT_API_OR_NETWORK",
    "EXIT_VALIDATION_OR_CONFIG",
    "parse_region",
]
