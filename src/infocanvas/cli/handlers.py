"""
Error handling for the CLI.

Maps library exceptions to exit codes and user-facing messages so command
bodies can stay free of try/except for known errors.
"""

import sys
from collections.abc import Callable

import click

from infocanvas import (
    ConfigurationError,
    ImageProcessingError,
    InfocanvasError,
    NoImageInResponseError,
    TransportError,
    ValidationError,
)
from infocanvas.cli import progress
from infocanvas.cli.utils import EXIT_API_OR_NETWORK, EXIT_VALIDATION_OR_CONFIG
from infocanvas.logging_config import get_logger

logger = get_logger(__name__)

_TRANSPORT_PREFIX = "Failed to generate image. "


def map_exception_to_exit(exc: BaseException) -> tuple[int, str]:
    """Map library and known exceptions to (exit_code, user_message)."""
    if isinstance(exc, ValidationError):
        msg = exc.args[0] if exc.args else "Validation failed."
        if getattr(exc, "field", None):
            msg = f"{msg} (field: {exc.field})"
        return (EXIT_VALIDATION_OR_CONFIG, msg)
    if isinstance(exc, ConfigurationError):
        return (EXIT_VALIDATION_OR_CONFIG, exc.args[0] if exc.args else "Invalid configuration.")
    if isinstance(exc, ImageProcessingError):
        return (EXIT_VALIDATION_OR_CONFIG, exc.args[0] if exc.args else "Image processing failed.")
    if isinstance(exc, NoImageInResponseError):
        return (EXIT_API_OR_NETWORK, exc.args[0] if exc.args else "No image in response.")
    if isinstance(exc, TransportError):
        msg = exc.args[0] if exc.args else "API or network error."
        if not msg.startswith(_TRANSPORT_PREFIX):
            msg = f"{_TRANSPORT_PREFIX}{msg}"
        return (EXIT_API_OR_NETWORK, msg)
    if isinstance(exc, InfocanvasError):
        return (EXIT_API_OR_NETWORK, exc.args[0] if exc.args else "An error occurred.")
    return (EXIT_API_OR_NETWORK, str(exc) if exc.args else "An unexpected error occurred.")


def run_with_error_handling(
    fn: Callable[[], None],
    *,
    quiet: bool = False,
) -> None:
    """Run fn(); on exception map to exit code and message, print and sys.exit."""
    try:
        fn()
    except Exception as e:
        if not isinstance(e, InfocanvasError):
            logger.exception("Unexpected error")
        code, msg = map_exception_to_exit(e)
        if quiet:
            click.echo(msg, err=True)
        else:
            progress.print_error(msg)
        sys.exit(code)


__all__ = [
    "map_exception_to_exit",
    "run_with_error_handling",
]
