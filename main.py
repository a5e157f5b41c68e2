"""
URI Router CLI Interface

Routes shared text or clicked links to one of two applications,
based on a user-maintained list of domain patterns.

Usage:
    uri-router                      interactive management shell
    uri-router share "<text>"       route shared text (title + link)
    uri-router open <uri>           route a clicked link
"""

import sys
from typing import List, Optional

from app.config import (
    validate_config,
    DB_PATH,
    DEFAULT_PATTERNS,
    ENABLE_FILE_LOGGING,
    LOG_FILE_PATH,
    LOG_LEVEL,
    MAX_PATTERN_LENGTH,
    PRIMARY_APP,
    SECONDARY_APP,
    SETTINGS_PATH,
)
from core.pattern_manager import PatternManager
from core.pattern_store import PatternStore
from core.routing.router import Router
from core.settings import SettingsFlag
from infra.logger import setup_logging, logger_cli
from infra.ui import print_patterns, show_events, show_message, show_outcome
from tools.launcher import Launcher
from tools.schemas import IntentKind, LaunchOutcome, UrlPattern


# ═══════════════════════════════════════════════════════════════════════════════
# COMPONENTS
# ═══════════════════════════════════════════════════════════════════════════════

class Components:
    """Wires store, settings, manager and router from configuration."""

    def __init__(self, db_path: str = DB_PATH, settings_path: str = SETTINGS_PATH, launcher: Optional[Launcher] = None):
        self.store = PatternStore(db_path, defaults=DEFAULT_PATTERNS, max_length=MAX_PATTERN_LENGTH)
        self.settings = SettingsFlag(settings_path)
        self.manager = PatternManager(self.store)
        self.router = Router(
            store=self.store,
            launcher=launcher or Launcher(),
            primary=PRIMARY_APP,
            secondary=SECONDARY_APP,
            settings=self.settings,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# CLI INTERFACE
# ═══════════════════════════════════════════════════════════════════════════════

class CLI:
    """
    Command-line interface for managing patterns and routing URLs.

    Plays the part of the host UI: list display, add/delete controls,
    debug toggle, and the share/open entry points.
    """

    def __init__(self, components: Components):
        self.components = components
        self._unsubscribe = None

    def run(self):
        """Start interactive CLI session"""
        self._print_welcome()

        # Live list refresh after every store write
        self._unsubscribe = self.components.store.subscribe(self._on_patterns_changed)

        try:
            while True:
                line = self._get_input()

                if not line:
                    continue

                command, _, argument = line.partition(" ")
                command = command.lower()
                argument = argument.strip()

                if command in ("exit", "quit", "q"):
                    break

                try:
                    self.dispatch(command, argument)
                except Exception as e:
                    print(f"\n❌ Error: {str(e)}\n")
                    logger_cli.error(f"CLI_ERROR | command={command} | error={str(e)}")

        except KeyboardInterrupt:
            print()

        finally:
            if self._unsubscribe:
                self._unsubscribe()
            self._print_goodbye()

    def dispatch(self, command: str, argument: str):
        """Run one shell command."""
        manager = self.components.manager

        if command in ("help", "h", "?"):
            self._print_help()

        elif command in ("list", "ls"):
            print_patterns(manager.patterns)

        elif command == "add":
            manager.add_pattern(argument)

        elif command in ("remove", "rm", "delete"):
            self._remove(argument)

        elif command == "debug":
            self._toggle_debug(argument)

        elif command == "share":
            show_outcome(self.components.router.route(argument, IntentKind.SHARED_TEXT))

        elif command == "open":
            show_outcome(self.components.router.route(argument, IntentKind.VIEW_URI))

        else:
            show_message(f"Unknown command: {command} (type 'help')")

        # One-shot notifications (duplicate pattern etc.)
        show_events(manager.drain_events())

    def _remove(self, argument: str):
        """Remove by list number or by pattern text."""
        patterns = self.components.manager.patterns
        item: Optional[UrlPattern] = None

        if argument.isdecimal() and 1 <= int(argument) <= len(patterns):
            item = patterns[int(argument) - 1]
        else:
            item = self.components.store.get(argument)

        if item is None:
            show_message(f"No such pattern: {argument}")
            return

        self.components.manager.delete_pattern(item)

    def _toggle_debug(self, argument: str):
        settings = self.components.settings
        if argument.lower() in ("on", "off"):
            settings.set(argument.lower() == "on")
        elif not argument:
            settings.set(not settings.get())
        else:
            show_message("Usage: debug [on|off]")
            return

        show_message("Debug enabled" if settings.get() else "Debug disabled")

    def _on_patterns_changed(self, patterns: List[UrlPattern]):
        print_patterns(patterns)

    def _get_input(self) -> str:
        """Get user input with prompt"""
        try:
            return input("\nrouter> ").strip()
        except EOFError:
            return "exit"

    def _print_welcome(self):
        """Print welcome message"""
        settings = self.components.settings
        print("=" * 60)
        print("  URI Router")
        print("=" * 60)
        print()
        print(f"  Matching hosts open in:  {PRIMARY_APP.name} ({PRIMARY_APP.command})")
        print(f"  Everything else opens in: {SECONDARY_APP.name} ({SECONDARY_APP.command})")
        print(f"  Debug tracing: {'on' if settings.get() else 'off'}")
        print()
        print_patterns(self.components.manager.patterns)
        print()
        print("  Commands: list | add | remove | debug | share | open | help | exit")

    def _print_help(self):
        """Print help message"""
        print()
        print("Available commands:")
        print("  list                - Show stored patterns")
        print("  add <pattern>       - Add a pattern (example.com or .lan)")
        print("  remove <n|pattern>  - Remove a pattern by number or text")
        print("  debug [on|off]      - Toggle per-comparison match tracing")
        print("  share <text>        - Route the first URL found in text")
        print("  open <uri>          - Route a URI as-is")
        print("  exit, quit          - Exit the application")
        print()
        print("Patterns:")
        print('  "example.com"  matches example.com and any subdomain')
        print('  ".lan"         matches lan and any name ending in .lan')
        print()

    def _print_goodbye(self):
        """Print goodbye message"""
        print()
        print("Goodbye! 👋")
        print()


# ═══════════════════════════════════════════════════════════════════════════════
# ONE-SHOT ROUTING
# ═══════════════════════════════════════════════════════════════════════════════

ONE_SHOT_COMMANDS = {
    "share": IntentKind.SHARED_TEXT,
    "open": IntentKind.VIEW_URI,
}


def route_once(components: Components, command: str, argument: str) -> int:
    """
    Route a single share/open and return the process exit code.

    The completion callback is the point where the host would close.
    """
    outcomes: List[LaunchOutcome] = []
    components.router.route(argument, ONE_SHOT_COMMANDS[command], on_complete=outcomes.append)

    outcome = outcomes[0]
    show_outcome(outcome)
    return 0 if outcome.success else 1


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════════

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.

    Sets up logging, validates configuration, then either routes once
    or starts the interactive shell.
    """
    argv = sys.argv[1:] if argv is None else argv

    try:
        setup_logging(
            level=LOG_LEVEL,
            log_file=LOG_FILE_PATH if ENABLE_FILE_LOGGING else None
        )

        validate_config()
        components = Components()

        if argv and argv[0] in ONE_SHOT_COMMANDS:
            return route_once(components, argv[0], " ".join(argv[1:]))

        if argv:
            print(__doc__)
            return 2

        logger_cli.info("URI Router shell starting")
        CLI(components).run()
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0

    except Exception as e:
        logger_cli.error(f"STARTUP_ERROR | error={str(e)}")
        print(f"\n❌ Startup error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
