"""
User notifications.

A notification has a style, a title and an optional message. The console
notifier prints them; the menu-bar app posts them to Notification Center.
"""

from enum import Enum

import click

from .logging_config import get_logger

logger = get_logger(__name__)


class Style(Enum):
    ANIMATED = "animated"
    SUCCESS = "success"
    FAILURE = "failure"


class Notifier:
    """Base notifier: records the notification in the log only."""

    def notify(self, style, title, message=None):
        text = f"{title}: {message}" if message else title
        if style is Style.FAILURE:
            logger.warning(text)
        else:
            logger.debug(text)
        self.show(style, title, message)

    def show(self, style, title, message=None):
        pass


class ConsoleNotifier(Notifier):
    """Prints notifications to the terminal."""

    COLORS = {
        Style.ANIMATED: None,
        Style.SUCCESS: "green",
        Style.FAILURE: "red",
    }

    def show(self, style, title, message=None):
        click.secho(title, fg=self.COLORS[style], err=style is Style.FAILURE)
        if message:
            click.echo(f"  {message}", err=style is Style.FAILURE)
