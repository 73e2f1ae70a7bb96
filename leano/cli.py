#!/usr/bin/env python3
"""
Interactive command-line client for Leano routers

Usage:
    leano                        # Credentials from environment or prompts
    leano --url 192.168.0.1 -v   # Other router, debug logging

See leano.config for the environment variables read.
"""

import argparse
import json
import logging
import sys
from typing import Callable, List, Optional, TextIO

from .config import Settings
from .display import render, render_frame, render_neighbour_cells
from .errors import AuthRejectedError, LeanoError
from .monitor import watch_and_poll
from .pages import Navigation, PaginationState
from .router_api import RouterAPI

log = logging.getLogger("leano.cli")

InputFn = Callable[[str], str]

MENU = """
──────────────────────────────────────────────────────────────────────
  1. Set DMZ
  2. Live dashboard (auto refresh, n/p to switch page)
  3. Browse dashboard pages
  4. Neighbour cells
  5. Set band lock
  6. Raw command
  0. Exit
──────────────────────────────────────────────────────────────────────"""


def setup_logging(verbose: bool = False) -> None:
    """Configure the leano loggers"""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S"
    ))
    root = logging.getLogger("leano")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="leano",
        description="Command-line client for the Leano router HTTP API.",
        epilog="Set LEANO_PASSWORD to log in without prompts."
    )
    parser.add_argument("--url", help="Router base URL (default: $LEANO_URL or http://192.168.0.1)")
    parser.add_argument("--username", help="Username (default: $LEANO_USERNAME or admin)")
    parser.add_argument("--interval", type=float,
                        help="Live dashboard refresh interval in seconds (default: 3)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def connect(settings: Settings) -> RouterAPI:
    """Log in with the configured password, or prompt for credentials"""
    if settings.password:
        print(f"\n🔄 Logging in as '{settings.username}' to {settings.base_url}...")
        api = RouterAPI.from_settings(settings)
        api.authenticate(settings.username, settings.password)
        print("   ✅ Authenticated using environment variables")
    else:
        api = RouterAPI.login_interactive(settings)

    if api.session.degraded:
        print("\n⚠️  The router accepted the login but returned an empty token.")
        print("   Commands may be rejected.")
    return api


def print_failure(response) -> None:
    print(f"\n❌ Router reported failure: {json.dumps(response)}")


def do_set_dmz(api: RouterAPI, settings: Settings, input_fn: InputFn = input) -> None:
    ip = input_fn(f"DMZ host IP [{settings.dmz_ip}]: ").strip() or settings.dmz_ip
    response = api.set_dmz(ip)
    if response.succeeded:
        print(f"\n✅ DMZ enabled for {ip}")
    else:
        print_failure(response)


def do_set_band_lock(api: RouterAPI, input_fn: InputFn = input) -> None:
    earfcn = input_fn("EARFCN (e.g. 42490): ").strip()
    if not earfcn:
        print("\n❌ EARFCN is required")
        return

    response = api.set_band_lock(earfcn)
    if response.succeeded:
        print(f"\n✅ Band lock set to EARFCN {earfcn}")
    else:
        print_failure(response)


def do_neighbour_cells(api: RouterAPI) -> None:
    print("\n" + render_neighbour_cells(api.neighbour_cells()))


def do_raw_command(api: RouterAPI, input_fn: InputFn = input) -> None:
    command = input_fn("Command: ").strip()
    if not command:
        return
    print(json.dumps(api.execute(command), indent=2))


def do_live_dashboard(api: RouterAPI, settings: Settings, pages: PaginationState,
                      stream: Optional[TextIO] = None) -> int:
    """Live dashboard until 'q' is typed; 'n'/'p' switch the page"""

    def show(response, view):
        print(render_frame(view, response, settings.poll_interval), flush=True)

    try:
        frames = watch_and_poll(api, show, interval=settings.poll_interval,
                                pages=pages, stream=stream)
    except KeyboardInterrupt:
        print("\n\n👋 Monitoring stopped")
        return 0

    print("\n👋 Monitoring stopped")
    return frames


def do_browse(api: RouterAPI, pages: PaginationState, input_fn: InputFn = input) -> None:
    """Page through the dashboard with n/p/q, fetching fresh data on each move"""
    pages.finished = False
    data = api.get_index_data()
    message = ""

    while True:
        print("\n" + render(pages.current, data, pages.position))
        if message:
            print(f"\n{message}")
            message = ""

        navigation = pages.handle(input_fn("\n[n]ext  [p]revious  [q]uit: "))
        if navigation is None:
            message = "❌ Invalid command"
            continue
        if navigation is Navigation.QUIT:
            return
        data = api.get_index_data()


def run_menu(api: RouterAPI, settings: Settings, input_fn: InputFn = input,
             stream: Optional[TextIO] = None) -> None:
    """Show the menu until the user chooses Exit"""
    pages = PaginationState()
    handlers = {
        "1": lambda: do_set_dmz(api, settings, input_fn),
        "2": lambda: do_live_dashboard(api, settings, pages, stream),
        "3": lambda: do_browse(api, pages, input_fn),
        "4": lambda: do_neighbour_cells(api),
        "5": lambda: do_set_band_lock(api, input_fn),
        "6": lambda: do_raw_command(api, input_fn),
    }

    while True:
        print(MENU)
        choice = input_fn("Select: ").strip()
        if choice == "0":
            return

        handler = handlers.get(choice)
        if handler is None:
            print("\n❌ Invalid command")
            continue

        try:
            handler()
        except LeanoError as e:
            log.debug("Command failed", exc_info=True)
            print(f"\n❌ {e}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    settings = Settings.from_env().override(
        base_url=args.url, username=args.username, poll_interval=args.interval
    )

    print("=" * 70)
    print("📡 LEANO ROUTER CLIENT")
    print("=" * 70)

    try:
        api = connect(settings)
    except (ValueError, AuthRejectedError) as e:
        print(f"\n❌ Authentication failed: {e}")
        return 1
    except LeanoError as e:
        print(f"\n❌ Could not reach router: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\n\n❌ Cancelled by user")
        return 1

    try:
        run_menu(api, settings)
    except (KeyboardInterrupt, EOFError):
        print()

    print("\n👋 Bye")
    return 0


if __name__ == "__main__":
    sys.exit(main())
