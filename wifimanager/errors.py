"""
Error types raised by WiFi Manager.

Every error carries a short ``kind`` string so callers can report it
without inspecting the exception class.
"""


class WifiError(Exception):
    """Base class for all WiFi Manager errors."""

    kind = "wifi-error"


class InterfaceNotFoundError(WifiError):
    """No Wi-Fi hardware port could be identified on this machine."""

    kind = "interface-not-found"

    def __init__(self, message="Could not find Wi-Fi interface."):
        super().__init__(message)


class CommandFailedError(WifiError):
    """An OS utility could not be run or exited with a non-zero status."""

    kind = "command-failed"

    def __init__(self, command, returncode=None, output=""):
        self.command = command
        self.returncode = returncode
        self.output = output
        name = command[0] if command else "command"
        if returncode is None:
            message = f"Command not found: {name}"
        else:
            message = f"{name} failed with status {returncode}"
        if output:
            message = f"{message}: {output}"
        super().__init__(message)


class ParseFailedError(WifiError):
    """An OS utility produced output we could not understand."""

    kind = "parse-failed"


class CredentialNotFoundError(WifiError):
    """The Keychain has no password for a network, or access was denied."""

    kind = "credential-not-found"

    def __init__(self, name):
        self.name = name
        super().__init__(f"Password for {name} not found in Keychain or access denied.")


class WorkflowBusyError(WifiError):
    """A connection attempt is already in flight."""

    kind = "workflow-busy"
