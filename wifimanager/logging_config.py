"""
Centralized logging configuration for WiFi Manager.

All modules log through the stdlib logging tree. setup_logging() gives the
root logger two handlers: a log file that always records DEBUG, and a stderr
console that shows warnings only, or everything once debug is on. Debug can
be switched at runtime (the menu-bar app has a toggle for it) without
reopening the log file.
"""

import logging
import sys
from typing import Optional

from . import config


class WifiManagerLogger:
    """Owns the root handlers installed for WiFi Manager."""

    _initialized = False
    _debug_enabled = False
    _console_handler: Optional[logging.Handler] = None

    @classmethod
    def setup(cls, debug: bool = False, force_reinit: bool = False) -> None:
        """
        Install the file and console handlers on the root logger.

        Args:
            debug: If True, the console shows DEBUG output too
            force_reinit: If True, replace handlers installed by an earlier call
        """
        if cls._initialized and not force_reinit:
            cls.set_debug(debug)
            return

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
            handler.close()
        # Handlers do the filtering; the file wants every record
        root_logger.setLevel(logging.DEBUG)

        formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT)

        try:
            config.LOG_DIR.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(config.LOG_FILE)
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            root_logger.addHandler(file_handler)
        except OSError as e:
            print(f"Warning: Could not set up file logging: {e}", file=sys.stderr)

        cls._console_handler = logging.StreamHandler(sys.stderr)
        cls._console_handler.setFormatter(formatter)
        root_logger.addHandler(cls._console_handler)

        cls._initialized = True
        cls._debug_enabled = not debug
        cls.set_debug(debug)

    @classmethod
    def set_debug(cls, debug: bool) -> None:
        """Show or hide DEBUG output on the console."""
        if debug == cls._debug_enabled:
            return
        cls._debug_enabled = debug
        if cls._console_handler is not None:
            cls._console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
        logging.getLogger(__name__).info(f"Debug logging {'on' if debug else 'off'}")

    @classmethod
    def is_debug_enabled(cls) -> bool:
        return cls._debug_enabled


def setup_logging(debug: bool = False, force_reinit: bool = False) -> None:
    """Set up centralized logging. Wrapper for WifiManagerLogger.setup()."""
    WifiManagerLogger.setup(debug=debug, force_reinit=force_reinit)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a module logger.

    This never installs handlers; entry points call setup_logging() once
    they know the debug setting.
    """
    return logging.getLogger(name)


def is_debug_enabled() -> bool:
    return WifiManagerLogger.is_debug_enabled()


def set_debug(debug: bool) -> None:
    """Change the console level at runtime. Wrapper for WifiManagerLogger.set_debug()."""
    WifiManagerLogger.set_debug(debug)
