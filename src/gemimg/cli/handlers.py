"""
Error handling for the CLI.

Maps library exceptions to exit codes and user-facing messages.
"""

import sys
from collections.abc import Callable

import click

from gemimg import (
    APIError,
    ConfigurationError,
    GemimgError,
    InputNotFoundError,
    InvalidArgumentError,
    NetworkError,
    NoImageReturnedError,
    RequestTimeoutError,
)
from gemimg.cli import progress
from gemimg.cli.utils import EXIT_API_OR_NETWORK, EXIT_VALIDATION_OR_CONFIG


def map_exception_to_exit(exc: BaseException) -> tuple[int, str]:
    """Map library and known exceptions to (exit_code, user_message)."""
    if isinstance(exc, InvalidArgumentError):
        msg = exc.args[0] if exc.args else "Invalid argument."
        if exc.field:
            msg = f"{msg} (field: {exc.field})"
        return (EXIT_VALIDATION_OR_CONFIG, msg)
    if isinstance(exc, ConfigurationError):
        return (EXIT_VALIDATION_OR_CONFIG, exc.args[0] if exc.args else "Invalid configuration.")
    if isinstance(exc, InputNotFoundError):
        return (EXIT_VALIDATION_OR_CONFIG, exc.args[0] if exc.args else "Input image not found.")
    if isinstance(exc, NoImageReturnedError):
        return (EXIT_API_OR_NETWORK, f"No image returned by Gemini model {exc.model}.")
    if isinstance(exc, (APIError, NetworkError, RequestTimeoutError)):
        return (EXIT_API_OR_NETWORK, exc.args[0] if exc.args else "API or network error.")
    if isinstance(exc, GemimgError):
        return (EXIT_API_OR_NETWORK, exc.args[0] if exc.args else "An error occurred.")
    # Unhandled
    return (EXIT_API_OR_NETWORK, str(exc) if exc.args else "An unexpected error occurred.")


def run_with_error_handling(
    fn: Callable[[], None],
    *,
    quiet: bool = False,
    debug: bool = False,
) -> None:
    """
    Run fn(); on exception map to exit code and message, print and sys.exit.
    Used so command bodies stay free of try/except for known errors.
    With debug, exceptions outside the gemimg hierarchy propagate with their traceback.
    """
    try:
        fn()
    except GemimgError as e:
        code, msg = map_exception_to_exit(e)
        if quiet:
            click.echo(msg, err=True)
        else:
            progress.print_error(msg)
        sys.exit(code)
    except Exception as e:
        if debug:
            raise
        code, msg = map_exception_to_exit(e)
        if quiet:
            click.echo(msg, err=True)
        else:
            progress.print_error(msg)
        sys.exit(EXIT_API_OR_NETWORK)


__all__ = [
    "map_exception_to_exit",
    "run_with_error_handling",
]
