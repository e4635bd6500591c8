"""
MAFIA Commands Package.

This package contains the MAFIA CLI commands, one module per command.
"""

from .session import mafia, obtain_session

__all__ = ["mafia", "obtain_session"]
