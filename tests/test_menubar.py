"""
Unit tests for wifimanager/menubar.py

rumps is only installed on macOS, so these are skipped elsewhere. The app is
built without running rumps.App.__init__, and worker threads run inline.
"""

import queue

import pytest
from unittest.mock import MagicMock, patch

rumps = pytest.importorskip("rumps")

from wifimanager import logging_config  # noqa: E402
from wifimanager.menubar import RumpsNotifier, WifiManagerApp  # noqa: E402
from wifimanager.notifications import Style  # noqa: E402


class InlineThread:
    """Runs the target as soon as start() is called."""

    def __init__(self, target, daemon=None):
        self._target = target

    def start(self):
        self._target()


@pytest.fixture
def app():
    app = WifiManagerApp.__new__(WifiManagerApp)
    app.controller = MagicMock()
    app.is_busy = False
    app._ui_queue = queue.Queue()
    app.logger = MagicMock()
    with patch("wifimanager.menubar.Thread", InlineThread):
        yield app


def password_window(clicked=1, text="hunter2"):
    window = MagicMock()
    window.return_value.run.return_value = MagicMock(clicked=clicked, text=text)
    return window


def queued(app):
    tasks = []
    while not app._ui_queue.empty():
        tasks.append(app._ui_queue.get_nowait())
    return tasks


@pytest.mark.unit
class TestRumpsNotifier:
    def test_posts_results(self):
        with patch("rumps.notification") as mock_notification:
            RumpsNotifier().notify(Style.FAILURE, "Failed to connect to HomeWiFi", "timed out")

        mock_notification.assert_called_once_with(
            title="WiFi Manager", subtitle="Failed to connect to HomeWiFi", message="timed out"
        )

    def test_skips_progress_messages(self):
        with patch("rumps.notification") as mock_notification:
            RumpsNotifier().notify(Style.ANIMATED, "Scanning for networks...")

        mock_notification.assert_not_called()


@pytest.mark.unit
class TestBackgroundActions:
    def test_refresh_runs_and_queues_menu_update(self, app):
        app.on_refresh(None)

        app.controller.refresh.assert_called_once()
        assert not app.is_busy
        assert queued(app) == [app.update_menu]

    def test_busy_app_ignores_clicks(self, app):
        app.is_busy = True

        app.on_refresh(None)
        app.on_toggle(None)
        app.on_connect("HomeWiFi")

        app.controller.refresh.assert_not_called()
        app.controller.toggle_radio.assert_not_called()
        app.controller.connect.assert_not_called()

    def test_flag_clears_when_work_fails(self, app):
        app.controller.refresh.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            app.refresh()

        assert not app.is_busy


@pytest.mark.unit
class TestConnectFlow:
    def test_keychain_miss_queues_password_prompt(self, app):
        network = MagicMock()
        network.name = "HomeWiFi"
        app.controller.list.find.return_value = network
        app.controller.connect.return_value = MagicMock(needs_credential=True, succeeded=False)

        app.on_connect("HomeWiFi")

        prompt, update = queued(app)
        assert update == app.update_menu
        with patch("rumps.Window", password_window()):
            prompt()
        app.controller.submit_password.assert_called_once_with("hunter2")

    def test_cancelled_prompt_abandons_attempt(self, app):
        network = MagicMock()
        network.name = "HomeWiFi"

        with patch("rumps.Window", password_window(clicked=0, text="")):
            app.ask_password(network)

        app.controller.cancel_password.assert_called_once()
        app.controller.submit_password.assert_not_called()

    def test_password_typed_while_busy_abandons_attempt(self, app):
        network = MagicMock()
        network.name = "HomeWiFi"
        app.is_busy = True

        with patch("rumps.Window", password_window()):
            app.ask_password(network)

        app.controller.submit_password.assert_not_called()
        app.controller.cancel_password.assert_called_once()
        style, title, _ = app.controller.notifier.notify.call_args.args
        assert (style, title) == (Style.FAILURE, "Failed to connect to HomeWiFi")


@pytest.mark.unit
class TestDebugToggle:
    def test_toggles_console_debug(self, app):
        logging_config.setup_logging(debug=False, force_reinit=True)
        sender = MagicMock()

        app.on_debug(sender)
        assert logging_config.is_debug_enabled()
        assert sender.state == 1

        app.on_debug(sender)
        assert not logging_config.is_debug_enabled()
        assert sender.state == 0
