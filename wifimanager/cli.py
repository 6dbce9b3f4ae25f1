import signal
import sys

import click

from . import config
from .logging_config import get_logger, setup_logging
from .network import WifiAdapter
from .notifications import ConsoleNotifier
from .presentation import WifiController, strength_bars
from .storage import UsageStore
from .workflow import ConnectionWorkflow, PollScheduler

logger = get_logger(__name__)


def signal_handler(signum, frame):
    """Handle interrupt signals gracefully."""
    signal_name = signal.Signals(signum).name
    click.echo(f"\n\nReceived {signal_name}. Exiting gracefully...")
    sys.exit(0)


BAR_GLYPHS = {1: "▂   ", 2: "▂▄  ", 3: "▂▄▆ ", 4: "▂▄▆█"}


def build_controller(cfg, notifier=None):
    """Wire one adapter, store and workflow for the lifetime of this process."""
    adapter = WifiAdapter()
    usage_store = UsageStore()
    workflow = ConnectionWorkflow(adapter, usage_store, scheduler=PollScheduler.from_config(cfg))
    return WifiController(adapter, usage_store, notifier=notifier or ConsoleNotifier(), workflow=workflow)


def format_network(network, selected=False):
    """One line of the network listing."""
    pointer = ">" if selected else " "
    marker = click.style("●", fg="green") if network.is_connected else " "
    name = click.style(network.name, bold=network.is_connected)
    parts = [f"{pointer} {marker} {BAR_GLYPHS[strength_bars(network.strength)]} {name}"]
    if network.is_connected:
        parts.append(f"IP: {network.ip_address or '...'}")
    if network.requires_password:
        parts.append(network.security)
    if network.usage_count:
        parts.append(f"used {network.usage_count}x")
    return "  ".join(parts)


def echo_listing(controller, show_selection=False):
    if not controller.radio_enabled:
        click.echo("Wi-Fi is turned off. Press t to turn it on." if show_selection else "Wi-Fi is turned off.")
        return
    if controller.error is not None:
        click.echo(click.style("Could not fetch connections", fg="red"))
        click.echo(f"  {controller.error}")
        return
    if not controller.list.networks:
        click.echo("No Wi-Fi networks found.")
        return
    for network in controller.list.networks:
        selected = show_selection and network.name == controller.list.selected_name
        click.echo(format_network(network, selected=selected))


def prompt_password(network):
    """Ask for a password; an empty answer means the user gave up."""
    return click.prompt(
        f"Password for {network.name}",
        default="",
        hide_input=True,
        show_default=False,
    )


def run_connect(controller, network, password=None):
    """Connect, asking for a password when the Keychain has none."""
    result = controller.connect(network)
    if result is not None and result.needs_credential:
        password = password or prompt_password(network)
        if not password:
            controller.cancel_password()
            click.echo("Connection cancelled.")
            return None
        result = controller.submit_password(password)
    return result


class OrderedGroup(click.Group):
    """Custom Click group that preserves command order."""

    def list_commands(self, ctx):
        return list(self.commands.keys())


@click.group(cls=OrderedGroup)
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, debug):
    """
    WiFi Manager - view, rank and join Wi-Fi networks on macOS.

    Networks you join most often are listed first, right after the one you
    are connected to. Passwords are taken from the Keychain when available.
    """
    cfg = config.load_config()
    setup_logging(debug=debug or config.get_setting(cfg, "debug"))
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


def _controller(ctx):
    if "controller" not in ctx.obj:
        ctx.obj["controller"] = build_controller(ctx.obj["config"])
    return ctx.obj["controller"]


@cli.command(name="list")
@click.pass_context
def list_networks(ctx):
    """
    List nearby networks.

    The connected network comes first, the rest are ordered by how often
    you have connected to them.
    """
    controller = _controller(ctx)
    controller.refresh()
    echo_listing(controller)


@cli.command()
@click.argument("name")
@click.option(
    "--password",
    "-p",
    default=None,
    help="Password to use when the Keychain has none for this network.",
)
@click.pass_context
def connect(ctx, name, password):
    """Connect to the network NAME."""
    controller = _controller(ctx)
    controller.refresh()
    network = controller.list.find(name)
    if network is None:
        click.echo(f"Network '{name}' is not in range.", err=True)
        ctx.exit(1)
    if network.is_connected:
        click.echo(f"Already connected to {name}.")
        return

    result = run_connect(controller, network, password)
    if result is None or not result.succeeded:
        ctx.exit(1)


@cli.command()
@click.pass_context
def toggle(ctx):
    """Turn Wi-Fi on if it is off, and off if it is on."""
    controller = _controller(ctx)
    if controller.toggle_radio() is None:
        ctx.exit(1)


MANAGE_HELP = "j/k: move  c/enter: connect  t: toggle Wi-Fi  r: refresh  q: quit"


@cli.command()
@click.pass_context
def manage(ctx):
    """
    Browse networks interactively.

    \b
    j / k     move the selection down / up
    c, enter  connect to the selected network
    t         toggle Wi-Fi
    r         refresh
    q         quit
    """
    controller = _controller(ctx)
    controller.refresh()

    while True:
        click.clear()
        echo_listing(controller, show_selection=True)
        click.echo(click.style(MANAGE_HELP, dim=True))

        key = click.getchar()
        if key in ("", "q", "\x1b", "\x03", "\x04"):
            break
        elif key == "j":
            controller.select_next()
        elif key == "k":
            controller.select_previous()
        elif key == "r":
            controller.refresh()
        elif key == "t":
            controller.toggle_radio()
            controller.refresh()
        elif key in ("c", "\r", "\n"):
            network = controller.list.selected
            if network is None or network.is_connected:
                continue
            result = run_connect(controller, network)
            if result is not None and result.succeeded:
                controller.refresh()
            else:
                click.pause()


@cli.command()
@click.pass_context
def menubar(ctx):
    """Run WiFi Manager in the macOS menu bar."""
    from .menubar import main

    main(ctx.obj["config"])


def main():
    """Console script entry point."""
    signal.signal(signal.SIGINT, signal_handler)  # Ctrl+C
    signal.signal(signal.SIGTERM, signal_handler)  # Termination signal
    cli()


if __name__ == "__main__":
    main()
