"""UI helper exports for the MAFIA CLI."""

from .components import console, display_credentials, render_status
from .theme import THEME, style

__all__ = [
    "console",
    "display_credentials",
    "render_status",
    "THEME",
    "style",
]
