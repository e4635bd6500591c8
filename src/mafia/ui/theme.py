"""Colour palette for MAFIA terminal output."""

THEME = {
    "accent": "#38bdf8",
    "text_primary": "default",
    "text_muted": "grey58",
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def style(name: str) -> str:
    """Return the rich style for a theme entry, falling back to the terminal default."""
    return THEME.get(name, "default")
