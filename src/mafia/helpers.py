"""
MAFIA Shared Utility Functions.

This module contains the error types raised by the credential file, STS and
command modules, along with the logging setup shared by the CLI.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


class MafiaError(Exception):
    """Base class for errors reported to the user by the CLI."""
    pass


class ConfigLoadError(MafiaError):
    """Raised when the credentials file cannot be read or parsed."""
    pass


class SectionNotFoundError(MafiaError):
    """Raised when a required section is missing from the credentials file."""
    pass


class KeyNotFoundError(MafiaError):
    """Raised when a required key is missing or empty in a section."""
    pass


class ExchangeError(MafiaError):
    """Raised when STS refuses or fails to issue session credentials."""
    pass


class SaveError(MafiaError):
    """Raised when session credentials cannot be written to the credentials file."""
    pass


def setup_logging(verbose: bool = False) -> None:
    """Route MAFIA log records to stderr through rich.

    Args:
        verbose: Log at DEBUG level instead of WARNING
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("mafia")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
