"""
Keychain access for Wi-Fi passwords.

Wi-Fi passwords are stored as "AirPort network password" items whose
account is the SSID.
"""

from .. import config
from ..errors import CommandFailedError, CredentialNotFoundError
from ..logging_config import get_logger
from ..utils import run_command

logger = get_logger(__name__)


def find_password(name, runner=run_command):
    """
    Look up the stored password for a network.

    Raises:
        CredentialNotFoundError: if there is no item, access was denied, or it is empty
    """
    try:
        output = runner(
            [config.SECURITY, "find-generic-password", "-wa", name],
            capture=True,
            quiet_on_error=True,
            check=True,
        )
    except CommandFailedError as e:
        logger.debug(f"Keychain lookup for {name} failed: {e}")
        raise CredentialNotFoundError(name) from e

    password = (output or "").strip()
    if not password:
        raise CredentialNotFoundError(name)
    logger.debug(f"Found Keychain password for {name}")
    return password


def trust_password(name, password, runner=run_command):
    """
    Store the password so `security` may read it without prompting again.

    Best effort: the outcome is logged and otherwise ignored.
    """
    try:
        ok = runner(
            [
                config.SECURITY,
                "add-generic-password",
                "-U",
                "-a",
                name,
                "-s",
                name,
                "-w",
                password,
                "-T",
                config.SECURITY,
            ],
            quiet_on_error=True,
            redact=[password],
        )
        logger.debug(f"Trust registration for {name}: {'ok' if ok else 'failed'}")
    except Exception as e:
        logger.debug(f"Trust registration for {name} raised: {e}")
