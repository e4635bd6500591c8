"""Unit tests for aws_utils.py."""

from datetime import datetime, timezone

import pytest
import boto3
from moto import mock_aws
from botocore.exceptions import ClientError, EndpointConnectionError, ParamValidationError

from mafia.aws_utils import get_session_credentials
from mafia.helpers import ExchangeError


@pytest.fixture
def aws_region(monkeypatch):
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@mock_aws
def test_get_session_credentials_success(aws_region):
    """Test get_session_credentials against a mocked STS endpoint."""
    credentials = get_session_credentials("arn:aws:iam::123456789012:mfa/jane", "123456", 3600)

    assert credentials.access_key_id
    assert credentials.secret_access_key
    assert credentials.session_token
    assert credentials.expiration is not None


def test_get_session_credentials_maps_response(mocker):
    """Test the STS request parameters and the mapping of the response."""
    expiration = datetime(2026, 1, 1, tzinfo=timezone.utc)
    mock_sts_client = mocker.MagicMock()
    mock_sts_client.get_session_token.return_value = {
        "Credentials": {
            "AccessKeyId": "key",
            "SecretAccessKey": "secret",
            "SessionToken": "token",
            "Expiration": expiration,
        }
    }
    mock_session = mocker.MagicMock()
    mock_session.client.return_value = mock_sts_client

    credentials = get_session_credentials("mfa-device-id", "123456", 900, session=mock_session)

    mock_session.client.assert_called_once_with("sts")
    mock_sts_client.get_session_token.assert_called_once_with(
        SerialNumber="mfa-device-id",
        TokenCode="123456",
        DurationSeconds=900,
    )
    assert credentials.access_key_id == "key"
    assert credentials.secret_access_key == "secret"
    assert credentials.session_token == "token"
    assert credentials.expiration == expiration


def test_get_session_credentials_uses_ambient_session(mocker):
    """Test a boto3 session is created from the environment when none is given."""
    mock_sts_client = mocker.MagicMock()
    mock_sts_client.get_session_token.return_value = {
        "Credentials": {"AccessKeyId": "key", "SecretAccessKey": "secret", "SessionToken": "token"}
    }
    mock_session = mocker.MagicMock()
    mock_session.client.return_value = mock_sts_client
    session_factory = mocker.patch("boto3.Session", return_value=mock_session)

    credentials = get_session_credentials("mfa-device-id", "123456", 3600)

    session_factory.assert_called_once_with()
    assert credentials.expiration is None


def test_get_session_credentials_invalid_code(mocker):
    """Test an STS rejection is raised once, verbatim, without retry."""
    mock_sts_client = mocker.MagicMock()
    error = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "MultiFactorAuthentication failed with invalid MFA one time pass code."}},
        "GetSessionToken",
    )
    mock_sts_client.get_session_token.side_effect = error
    mock_session = mocker.MagicMock()
    mock_session.client.return_value = mock_sts_client

    with pytest.raises(ExchangeError) as excinfo:
        get_session_credentials("mfa-device-id", "000000", 3600, session=mock_session)

    assert str(excinfo.value) == str(error)
    assert excinfo.value.__cause__ is error
    assert mock_sts_client.get_session_token.call_count == 1


def test_get_session_credentials_short_code(mocker):
    """Test client side parameter validation errors are reported as exchange errors."""
    mock_sts_client = mocker.MagicMock()
    mock_sts_client.get_session_token.side_effect = ParamValidationError(
        report="Invalid length for parameter TokenCode, value: 3, valid min length: 6"
    )
    mock_session = mocker.MagicMock()
    mock_session.client.return_value = mock_sts_client

    with pytest.raises(ExchangeError) as excinfo:
        get_session_credentials("mfa-device-id", "123", 3600, session=mock_session)

    assert "TokenCode" in str(excinfo.value)


def test_get_session_credentials_network_failure(mocker):
    """Test connection failures are reported as exchange errors."""
    mock_sts_client = mocker.MagicMock()
    mock_sts_client.get_session_token.side_effect = EndpointConnectionError(
        endpoint_url="https://sts.amazonaws.com"
    )
    mock_session = mocker.MagicMock()
    mock_session.client.return_value = mock_sts_client

    with pytest.raises(ExchangeError) as excinfo:
        get_session_credentials("mfa-device-id", "123456", 3600, session=mock_session)

    assert "sts.amazonaws.com" in str(excinfo.value)
