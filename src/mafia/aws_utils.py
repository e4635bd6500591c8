# Copyright (c) 2025 The mafia authors
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
AWS utilities for MAFIA.

This module exchanges an MFA device ID and a one-time code for temporary
session credentials through AWS STS. The long-lived credentials used to sign
the request are resolved by boto3 from its usual sources (environment,
shared credentials file, instance metadata); MAFIA does not manage them.

Functions:
    get_session_credentials: Call STS GetSessionToken once and map the result
"""

import logging
from typing import Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from mafia.helpers import ExchangeError
from mafia.models import SessionCredentials

logger = logging.getLogger(__name__)

# (mfa_device_id, token_code, duration_seconds) -> credentials
CredentialExchange = Callable[[str, str, int], SessionCredentials]


def get_session_credentials(
    mfa_device_id: str,
    token_code: str,
    duration_seconds: int,
    session: Optional[boto3.Session] = None,
) -> SessionCredentials:
    """
    Obtain MFA authenticated session credentials from AWS STS.

    Exactly one request is made. One-time codes expire within seconds, so a
    failed request is reported rather than retried.

    Args:
        mfa_device_id: Serial number or ARN of the MFA device,
            e.g. arn:aws:iam::123456789012:mfa/jane
        token_code: Code currently displayed by the device; STS validates it
        duration_seconds: Requested lifetime, 900 to 129600 seconds per AWS
        session: boto3 session to use (default: a new one from the environment)

    Returns:
        SessionCredentials: The temporary access key, secret and session token

    Raises:
        ExchangeError: If STS rejects the request or cannot be reached
    """
    try:
        session = session or boto3.Session()
        sts = session.client("sts")
        logger.debug("Requesting %d second session for %s", duration_seconds, mfa_device_id)
        response = sts.get_session_token(
            SerialNumber=mfa_device_id,
            TokenCode=token_code,
            DurationSeconds=duration_seconds,
        )
    except (BotoCoreError, ClientError) as e:
        raise ExchangeError(str(e)) from e

    credentials = response["Credentials"]
    logger.debug("Obtained session credentials for %s", credentials["AccessKeyId"])
    return SessionCredentials(
        access_key_id=credentials["AccessKeyId"],
        secret_access_key=credentials["SecretAccessKey"],
        session_token=credentials["SessionToken"],
        expiration=credentials.get("Expiration"),
    )
