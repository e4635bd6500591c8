"""
MAFIA Configuration.

Well-known names of the AWS credentials file and the runtime settings used
by the session command.
"""

from pathlib import Path

from pydantic import BaseModel, Field


# Section holding the long-lived identity and the MFA device ID
DEFAULT_SECTION_NAME = "default"

# Appended to the identity section name to name the session section
SESSION_SECTION_SUFFIX = "-session"
SESSION_SECTION_NAME = DEFAULT_SECTION_NAME + SESSION_SECTION_SUFFIX

ACCESS_KEY_ID_KEY = "aws_access_key_id"
SECRET_ACCESS_KEY_KEY = "aws_secret_access_key"
SESSION_TOKEN_KEY = "aws_session_token"
MFA_DEVICE_ID_KEY = "mfa_device_id"

# STS accepts 15 minutes to 36 hours; the requested value is not checked locally
MIN_DURATION_SECONDS = 900
MAX_DURATION_SECONDS = 129600
DEFAULT_DURATION_SECONDS = 3600


def default_credentials_path() -> Path:
    """Return the AWS credentials file of the current user."""
    return Path.home() / ".aws" / "credentials"


class MafiaConfig(BaseModel):
    """Runtime settings for a single session request."""

    credentials_file: Path = Field(default_factory=default_credentials_path)
    duration_seconds: int = DEFAULT_DURATION_SECONDS


def get_config() -> MafiaConfig:
    """Build the configuration used by the command line."""
    return MafiaConfig()
