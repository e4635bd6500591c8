"""Shared fixtures for the MAFIA tests."""

import configparser

import pytest

from mafia.config import MafiaConfig
from mafia.models import SessionCredentials

FAKE_ACCESS_KEY_ID = "FAKE_ACCESS_KEY_ID"
FAKE_SECRET_ACCESS_KEY = "FAKE_SECRET_ACCESS_KEY"
FAKE_MFA_DEVICE_ID = "arn:aws:iam::999999999999:mfa/jane"


def write_credentials(path, sections):
    """Write a credentials file with the given {section: {key: value}} content."""
    parser = configparser.ConfigParser(interpolation=None)
    parser.read_dict(sections)
    with open(path, "w") as f:
        parser.write(f)
    return path


def read_credentials(path):
    parser = configparser.ConfigParser(interpolation=None)
    with open(path) as f:
        parser.read_file(f)
    return parser


@pytest.fixture
def credentials_path(tmp_path):
    """A credentials file holding a default identity with an MFA device ID."""
    return write_credentials(
        tmp_path / "credentials",
        {
            "default": {
                "aws_access_key_id": FAKE_ACCESS_KEY_ID,
                "aws_secret_access_key": FAKE_SECRET_ACCESS_KEY,
                "mfa_device_id": FAKE_MFA_DEVICE_ID,
            }
        },
    )


@pytest.fixture
def config(credentials_path):
    return MafiaConfig(credentials_file=credentials_path)


@pytest.fixture
def fake_credentials():
    return SessionCredentials(access_key_id="key", secret_access_key="secret", session_token="token")
