"""
MAFIA Session Command.

This module provides the root command: exchange an MFA one-time code for
temporary AWS session credentials and either display them or save them to the
AWS credentials file.
"""

import logging
from typing import Optional

import typer

from mafia.aws_utils import CredentialExchange, get_session_credentials
from mafia.config import MafiaConfig, get_config
from mafia.credentials_file import read_mfa_device_id, save_session_credentials
from mafia.helpers import MafiaError, setup_logging
from mafia.models import SessionCredentials
from mafia.ui import display_credentials, render_status

logger = logging.getLogger(__name__)


def obtain_session(
    token_code: str,
    save: bool,
    config: MafiaConfig,
    exchange: CredentialExchange = get_session_credentials,
) -> SessionCredentials:
    """
    Look up the MFA device, obtain session credentials and present or save them.

    The steps run strictly in order and the first failure stops the sequence;
    errors are not caught here. When saving fails the credentials are not
    displayed instead.

    Args:
        token_code: One-time code from the MFA device
        save: Write to the credentials file instead of printing
        config: Credentials file location and requested duration
        exchange: Callable that trades the device ID and code for credentials

    Returns:
        SessionCredentials: The credentials that were displayed or saved
    """
    mfa_device_id = read_mfa_device_id(config.credentials_file)
    credentials = exchange(mfa_device_id, token_code, config.duration_seconds)

    if save:
        save_session_credentials(config.credentials_file, credentials)
        render_status(f"Session credentials saved to file {config.credentials_file}", level="success")
    else:
        display_credentials(credentials)

    return credentials


def mafia(
    ctx: typer.Context,
    token_code: Optional[str] = typer.Argument(
        None, metavar="token-code", help="Code currently shown by your MFA device", show_default=False
    ),
    save: bool = typer.Option(False, "--save", help="Save the obtained credentials to the AWS credentials file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
):
    """
    Establish temporary AWS credentials where MFA authentication codes are required.

    Given a token-code obtained from an MFA device, obtains temporary AWS
    credentials for the identity in the default section of the AWS credentials
    file, using the mfa_device_id recorded there.
    """
    if token_code is None or token_code == "help":
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    setup_logging(verbose)
    config = get_config()

    try:
        obtain_session(token_code, save, config, exchange=get_session_credentials)
    except MafiaError as e:
        logger.debug("Session request failed", exc_info=True)
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
