"""Rich output for the MAFIA CLI."""

from typing import Optional

from rich.console import Console
from rich.text import Text

from mafia.config import (
    ACCESS_KEY_ID_KEY,
    SECRET_ACCESS_KEY_KEY,
    SESSION_SECTION_NAME,
    SESSION_TOKEN_KEY,
)
from mafia.models import SessionCredentials

from .theme import style


console = Console()

# Environment variables read by the AWS CLI and SDKs
ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_SESSION_TOKEN = "AWS_SESSION_TOKEN"


def _plain(line: str = "", line_style: Optional[str] = None) -> None:
    # Credentials must survive copy and paste: no markup, highlighting or wrapping
    console.print(line, style=line_style, markup=False, highlight=False, soft_wrap=True)


def render_status(message: str, level: str = "info") -> Text:
    """Render a status line with semantic coloring."""
    icons = {
        "success": "✔",
        "warning": "!",
        "error": "✖",
        "info": "•",
    }
    styles = {
        "success": style("success"),
        "warning": style("warning"),
        "error": style("error"),
        "info": style("accent"),
    }

    icon = icons.get(level, icons["info"])
    status_text = Text(f"{icon} {message}", style=styles.get(level, styles["info"]))
    console.print(status_text, soft_wrap=True)
    return status_text


def display_credentials(credentials: SessionCredentials) -> None:
    """Print session credentials as shell exports and as a credentials file section."""
    _plain("To use the session credentials from the command line:", style("text_muted"))
    _plain()
    _plain(f"export {ENV_ACCESS_KEY_ID}={credentials.access_key_id}")
    _plain(f"export {ENV_SECRET_ACCESS_KEY}={credentials.secret_access_key}")
    _plain(f"export {ENV_SESSION_TOKEN}={credentials.session_token}")
    _plain()
    _plain("Remember to clear your shell history afterwards, e.g. 'history -c'.", style("warning"))
    _plain()
    _plain("Or paste the following into your AWS credentials file:", style("text_muted"))
    _plain()
    _plain(f"[{SESSION_SECTION_NAME}]")
    _plain(f"{ACCESS_KEY_ID_KEY} = {credentials.access_key_id}")
    _plain(f"{SECRET_ACCESS_KEY_KEY} = {credentials.secret_access_key}")
    _plain(f"{SESSION_TOKEN_KEY} = {credentials.session_token}")

    if credentials.expiration is not None:
        _plain()
        _plain(f"These credentials expire at {credentials.expiration:%Y-%m-%d %H:%M:%S %Z}".rstrip(), style("text_muted"))
