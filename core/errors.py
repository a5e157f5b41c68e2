"""
Router Errors

Store-level and launcher-level exceptions, plus the user-facing messages
the router attaches to each terminal outcome.
"""

from tools.schemas import AppTarget


# ═══════════════════════════════════════════════════════════════════════════════
# STORE ERRORS
# ═══════════════════════════════════════════════════════════════════════════════

class AlreadyExists(Exception):
    """Raised by PatternStore.add() when the pattern is already stored."""

    def __init__(self, pattern: str):
        super().__init__(f"Pattern already exists: {pattern}")
        self.pattern = pattern


class InvalidPattern(ValueError):
    """Raised by PatternStore.add() for blank, degenerate or oversized input."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


# ═══════════════════════════════════════════════════════════════════════════════
# LAUNCH ERRORS
# ═══════════════════════════════════════════════════════════════════════════════

class AppNotFound(Exception):
    """Raised by the launcher when the target application cannot be started."""

    def __init__(self, target: AppTarget, detail: str = ""):
        message = f"App '{target.name}' is not installed"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.target = target
        self.detail = detail


# ═══════════════════════════════════════════════════════════════════════════════
# USER-FACING MESSAGES
# ═══════════════════════════════════════════════════════════════════════════════

MSG_NO_INPUT = "No valid URL found to process."
MSG_NO_URL_IN_TEXT = "No valid URL found in shared text."
MSG_INVALID_URL = "Error: Invalid URL or pattern."
MSG_PATTERN_EXISTS = "Pattern already exists"


def app_not_found_message(target: AppTarget) -> str:
    return f"Error: App '{target.name}' is not installed."


def launched_message(target: AppTarget) -> str:
    return f"Opened in {target.name}"

