import queue
from threading import Thread

import rumps

from . import config
from .cli import build_controller
from .logging_config import get_logger, is_debug_enabled, set_debug
from .notifications import Notifier, Style
from .presentation import strength_bars

# Get module logger
logger = get_logger(__name__)

BAR_GLYPHS = {1: "▂", 2: "▂▄", 3: "▂▄▆", 4: "▂▄▆█"}


class RumpsNotifier(Notifier):
    """Posts notifications to Notification Center."""

    def show(self, style, title, message=None):
        # Progress messages would flood Notification Center
        if style is Style.ANIMATED:
            return
        rumps.notification(title=config.APP_TITLE, subtitle=title, message=message or "")


class WifiManagerApp(rumps.App):
    """Menu bar application listing nearby Wi-Fi networks."""

    def __init__(self, controller, *args, **kwargs):
        """Initializes the WiFi Manager menu bar application."""
        # Set a default name if not provided, required by rumps
        if "name" not in kwargs and not args:
            kwargs["name"] = config.APP_TITLE

        super(WifiManagerApp, self).__init__(*args, **kwargs)

        self.controller = controller
        self.is_busy = False  # Flag to prevent overlapping actions
        self._ui_queue = queue.Queue()

        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

        # Menus and dialogs may only be touched from the main thread, so
        # worker threads hand UI work back through this timer
        self._ui_timer = rumps.Timer(self._drain_ui_queue, 0.25)
        self._ui_timer.start()

        self.title = "Wi-Fi"
        self.update_menu()

    def update_menu(self):
        """Rebuild the menu from the controller's current listing."""
        try:
            self.menu.clear()
        except Exception as e:
            self.logger.error(f"Menu clear error: {e}")

        menu_items = [config.APP_TITLE, None]

        if not self.controller.radio_enabled:
            menu_items.append("Wi-Fi is turned off")
        elif self.controller.error is not None:
            menu_items.append("Could not fetch connections")
        elif not self.controller.list.networks:
            menu_items.append("No Wi-Fi networks found")
        else:
            for network in self.controller.list.networks:
                menu_items.append(self._network_item(network))

        menu_items.extend(
            [
                None,
                rumps.MenuItem("Toggle Wi-Fi", callback=self.on_toggle, key="t"),
                rumps.MenuItem("Refresh", callback=self.on_refresh, key="r"),
                None,
                self._debug_item(),
                rumps.MenuItem("Quit", callback=self.quit_app),
            ]
        )

        try:
            self.menu = menu_items
        except Exception as e:
            self.logger.error(f"Menu assignment error: {e}")

    def _debug_item(self):
        item = rumps.MenuItem("Debug Logging", callback=self.on_debug)
        item.state = int(is_debug_enabled())
        return item

    def _network_item(self, network):
        title = f"{network.name}  {BAR_GLYPHS[strength_bars(network.strength)]}"
        if network.is_connected:
            title += f"  IP: {network.ip_address or '...'}"
            item = rumps.MenuItem(title)
            item.state = 1
        else:
            item = rumps.MenuItem(title, callback=lambda _, name=network.name: self.on_connect(name))
        return item

    # --- Main thread helpers ---

    def _drain_ui_queue(self, _):
        while True:
            try:
                task = self._ui_queue.get_nowait()
            except queue.Empty:
                return
            try:
                task()
            except Exception as e:
                self.logger.error(f"UI task failed: {e}")

    def _run_in_background(self, work):
        """Run work on a worker thread unless another action is running."""
        if self.is_busy:
            self.logger.debug("Action already in progress, ignoring")
            return False
        self.is_busy = True

        def runner():
            try:
                work()
            finally:
                self.is_busy = False
                self._ui_queue.put(self.update_menu)

        Thread(target=runner, daemon=True).start()
        return True

    # --- Menu callbacks ---

    def refresh(self):
        self._run_in_background(self.controller.refresh)

    def on_refresh(self, _):
        self.logger.info("Manual refresh triggered from menu bar.")
        self.refresh()

    def on_toggle(self, _):
        def work():
            self.controller.toggle_radio()
            self.controller.refresh()

        self._run_in_background(work)

    def on_debug(self, sender):
        set_debug(not is_debug_enabled())
        sender.state = int(is_debug_enabled())

    def on_connect(self, name):
        network = self.controller.list.find(name)
        if network is None:
            return

        def work():
            result = self.controller.connect(network)
            if result is not None and result.needs_credential:
                self._ui_queue.put(lambda: self.ask_password(network))
            elif result is not None and result.succeeded:
                self.controller.refresh()

        self._run_in_background(work)

    def ask_password(self, network):
        """Prompt for a password on the main thread, then join in the background."""
        window = rumps.Window(
            message=f"Password for {network.name}",
            title=config.APP_TITLE,
            default_text="",
            ok="Connect",
            cancel="Cancel",
            dimensions=(240, 24),
            secure=True,
        )
        response = window.run()
        if not response.clicked or not response.text:
            self.controller.cancel_password()
            return

        def work():
            result = self.controller.submit_password(response.text)
            if result is not None and result.succeeded:
                self.controller.refresh()

        if not self._run_in_background(work):
            # Never leave the workflow waiting for a password nobody will submit
            self.controller.cancel_password()
            self.controller.notifier.notify(
                Style.FAILURE,
                f"Failed to connect to {network.name}",
                "Another action was still running. Try again.",
            )

    def quit_app(self, _):
        self.logger.info("Quit button clicked.")
        rumps.quit_application()


def main(cfg=None):
    """Main function to run the app."""
    cfg = cfg or config.load_config()
    controller = build_controller(cfg, notifier=RumpsNotifier())

    app = WifiManagerApp(controller, name=config.APP_TITLE, quit_button=None)

    # Hide from dock - this prevents the Python icon from appearing in the dock
    import AppKit

    try:
        shared_app = AppKit.NSApplication.sharedApplication()
        shared_app.setActivationPolicy_(AppKit.NSApplicationActivationPolicyAccessory)
        logger.debug("Set application activation policy to hide from dock")
    except Exception as e:
        logger.warning(f"Could not hide from dock: {e}")

    app.refresh()
    app.run()


if __name__ == "__main__":
    main()
