"""
AWS credentials file access for MAFIA.

Reads the MFA device ID from the default section of the AWS credentials file
and writes MFA authenticated session credentials back to the matching session
section. Saving only touches the lines of the session section; every other
line of the file is written back exactly as it was read.

Functions:
    read_mfa_device_id: Find the MFA device ID in the default section
    save_session_credentials: Store session credentials in the session section
"""

import configparser
import logging
import os
import re
import stat
import tempfile
from pathlib import Path
from typing import Dict, Union

from mafia.config import (
    ACCESS_KEY_ID_KEY,
    DEFAULT_SECTION_NAME,
    MFA_DEVICE_ID_KEY,
    SECRET_ACCESS_KEY_KEY,
    SESSION_SECTION_NAME,
    SESSION_TOKEN_KEY,
)
from mafia.helpers import ConfigLoadError, KeyNotFoundError, SaveError, SectionNotFoundError
from mafia.models import SessionCredentials

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

SECTION_HEADER = re.compile(r"^\s*\[(?P<name>[^\]]+)\]")
KEY_LINE = re.compile(r"^(?P<key>[^\s=:#;\[][^=:]*?)\s*[=:]")


def read_credentials_text(path: PathLike) -> str:
    """Return the raw content of the credentials file, line endings untranslated."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def parse_credentials(text: str, source: PathLike) -> configparser.ConfigParser:
    """Parse credentials file content.

    Repeated section headers are merged rather than rejected, and key names
    keep their case.

    Raises:
        configparser.Error: If the content is not valid INI
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str
    parser.read_string(text, source=str(source))
    logger.debug("Loaded %s with sections %s", source, parser.sections())
    return parser


def load_credentials_file(path: PathLike) -> configparser.ConfigParser:
    """Parse the credentials file at path.

    Missing files are an error; configparser.read() would silently ignore them.

    Raises:
        OSError: If the file cannot be opened or decoded
        configparser.Error: If the file is not valid INI
    """
    return parse_credentials(read_credentials_text(path), path)


def read_mfa_device_id(path: PathLike) -> str:
    """
    Find the MFA device ID in the default section of the given credentials file.

    Args:
        path: Location of the AWS credentials file

    Returns:
        str: The mfa_device_id value, exactly as stored

    Raises:
        ConfigLoadError: If the file cannot be read or parsed
        SectionNotFoundError: If there is no default section
        KeyNotFoundError: If mfa_device_id is missing or empty
    """
    try:
        parser = load_credentials_file(path)
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        raise ConfigLoadError(f"Could not read from credentials file {path}: {e}") from e

    if not parser.has_section(DEFAULT_SECTION_NAME):
        raise SectionNotFoundError(f"{DEFAULT_SECTION_NAME} section not found in {path}")

    device_id = parser.get(DEFAULT_SECTION_NAME, MFA_DEVICE_ID_KEY, fallback="")
    if not device_id:
        raise KeyNotFoundError(
            f"{MFA_DEVICE_ID_KEY} key not found in {DEFAULT_SECTION_NAME} section of {path}"
        )

    logger.debug("Using MFA device %s", device_id)
    return device_id


def update_session_section(text: str, values: Dict[str, str]) -> str:
    """
    Set keys of the session section in credentials file content.

    Existing lines for the given keys are replaced where they stand (repeats
    are dropped), keys not yet present are added after the last entry of the
    session section, and the section is appended to the end of the file if it
    does not exist. All other lines, comments included, are returned unchanged.

    Args:
        text: Current file content
        values: Key/value pairs to store in the session section

    Returns:
        str: The updated file content
    """
    newline = "\r\n" if "\r\n" in text else "\n"
    lines = text.splitlines(keepends=True)
    if lines and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += newline

    pending = dict(values)
    output = []
    in_session = False
    replacing = False
    # Position in output just after the last entry of a session section
    insert_at = None

    for line in lines:
        header = SECTION_HEADER.match(line)
        if header:
            in_session = header.group("name").strip() == SESSION_SECTION_NAME
            replacing = False
            output.append(line)
            if in_session:
                insert_at = len(output)
            continue

        if in_session:
            # Indented lines continue the value of the line above
            if replacing and line[:1].isspace() and line.strip():
                continue
            replacing = False

            key = KEY_LINE.match(line)
            if key and key.group("key") in values:
                replacing = True
                name = key.group("key")
                if name in pending:
                    output.append(f"{name} = {pending.pop(name)}{newline}")
                    insert_at = len(output)
                continue

            if line.strip() and not line.lstrip().startswith(("#", ";")):
                output.append(line)
                insert_at = len(output)
                continue

        output.append(line)

    added = [f"{name} = {value}{newline}" for name, value in pending.items()]
    if insert_at is None:
        if output and output[-1].strip():
            output.append(newline)
        output.append(f"[{SESSION_SECTION_NAME}]{newline}")
        output.extend(added)
    else:
        output[insert_at:insert_at] = added

    return "".join(output)


def save_session_credentials(path: PathLike, credentials: SessionCredentials) -> None:
    """
    Write session credentials to the session section of an existing credentials file.

    The session section is created if absent and its keys overwritten if present.
    Every other line is written back unchanged. If path is a symlink the file it
    points to is updated and the link is kept. The new content goes to a
    temporary file next to that file which then replaces it, so a failed write
    never leaves a truncated credentials file behind.

    Args:
        path: Location of the AWS credentials file, which must already exist
        credentials: Session credentials obtained from STS

    Raises:
        SaveError: If the file cannot be loaded or rewritten
    """
    try:
        text = read_credentials_text(path)
        parse_credentials(text, path)
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        raise SaveError(f"Could not read from credentials file {path}: {e}") from e

    values = {
        ACCESS_KEY_ID_KEY: credentials.access_key_id,
        SECRET_ACCESS_KEY_KEY: credentials.secret_access_key,
        SESSION_TOKEN_KEY: credentials.session_token,
    }
    updated = update_session_section(text, values)

    try:
        saved = parse_credentials(updated, path)
    except configparser.Error as e:
        raise SaveError(f"Could not update credentials file {path}: {e}") from e
    if {key: saved.get(SESSION_SECTION_NAME, key, fallback=None) for key in values} != values:
        raise SaveError(f"Could not update {SESSION_SECTION_NAME} section of credentials file {path}")

    try:
        _write_atomically(Path(path).resolve(), updated)
    except OSError as e:
        raise SaveError(f"Could not write to credentials file {path}: {e}") from e

    logger.debug("Wrote %s section of %s", SESSION_SECTION_NAME, path)


def _write_atomically(path: Path, text: str) -> None:
    """Write text to a sibling temporary file, then rename it over path."""
    mode = stat.S_IMODE(os.stat(path).st_mode)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
