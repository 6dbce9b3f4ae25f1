"""
Command execution utilities for WiFi Manager.

This module provides robust command execution with error handling and logging.
It serves as the central location for all command execution to avoid duplication.
"""

import subprocess

from ..errors import CommandFailedError
from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)


def run_command(command, capture=False, input=None, quiet_on_error=False, check=False, redact=None):
    """
    Execute a command with robust error handling and logging.

    Args:
        command: Command to execute (list of strings)
        capture: If True, return command output; if False, return success status
        input: Optional input to send to the command's stdin
        quiet_on_error: If True, suppress error logging for expected failures
        check: If True, raise CommandFailedError instead of returning a failure value
        redact: Optional list of arguments (e.g. passwords) masked in log output

    Returns:
        If capture=True: Command output string (stdout and stderr on failure) or None on error
        If capture=False: True on success, False on failure

    Raises:
        CommandFailedError: when check=True and the command is missing or exits non-zero
    """
    shown = _redacted(command, redact)
    logger.debug(f"Running command: {shown}")

    try:
        result = subprocess.run(
            command,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="ignore",
            input=input,
        )
    except FileNotFoundError:
        logger.error(f"Command not found: {command[0]}")
        if check:
            raise CommandFailedError(shown)
        return None if capture else False

    if result.stderr:
        if result.returncode != 0:
            logger.debug(f"Command failed with stderr: {result.stderr.strip()}")
        else:
            logger.debug(f"Command succeeded with stderr: {result.stderr.strip()}")

    if result.returncode != 0:
        output = ((result.stdout or "") + (result.stderr or "")).strip()
        if not quiet_on_error:
            logger.debug(f"Command '{shown}' failed with status {result.returncode}")
            if result.stdout:
                logger.debug(f"Stdout: {result.stdout.strip()}")
        else:
            logger.debug(f"Command '{shown}' failed (expected)")

        if check:
            raise CommandFailedError(shown, result.returncode, output)
        return output if capture else False

    return result.stdout.strip() if capture else True


def _redacted(command, secrets):
    """Return a copy of command with secret arguments masked."""
    if not secrets:
        return list(command)
    return ["****" if part in secrets else part for part in command]
