"""
Console UI Utilities

Rendering helpers for the management shell: pattern list display,
toast-style notifications and routing outcomes.
"""

from typing import List

from tools.schemas import LaunchOutcome, ShowMessage, UrlPattern


# ═══════════════════════════════════════════════════════════════════════════════
# PATTERN LIST
# ═══════════════════════════════════════════════════════════════════════════════

def print_patterns(patterns: List[UrlPattern]):
    """
    Print the pattern list, numbered.

    Args:
        patterns: Snapshot from the store (already ordered)
    """
    if not patterns:
        print("  No patterns. Every URL opens in the secondary app.")
        return

    width = len(str(len(patterns)))
    for i, item in enumerate(patterns, start=1):
        kind = "suffix" if item.is_suffix else "domain"
        print(f"  {i:>{width}}. {item.pattern:<40} [{kind}]")


# ═══════════════════════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ═══════════════════════════════════════════════════════════════════════════════

def show_message(message: str):
    """Short, non-blocking notice (the console stand-in for a toast)."""
    print(f"  » {message}")


def show_events(events: List[ShowMessage]):
    for event in events:
        show_message(event.message)


def show_outcome(outcome: LaunchOutcome):
    """Print a routing outcome."""
    icon = "✓" if outcome.success else "❌"
    print(f"  {icon} {outcome.message}")
    if outcome.host:
        rule = "matched" if outcome.matched else "no match"
        print(f"     host={outcome.host} ({rule})")
