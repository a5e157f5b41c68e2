"""
Centralized Logging Configuration

Provides structured logging for the URI router with:
- Component-specific loggers
- Consistent formatting
- Route tracing
- Pattern store auditing
"""

import logging
import sys
from pathlib import Path
from typing import Optional


# ═══════════════════════════════════════════════════════════════════════════════
# LOGGER CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure logging for the entire application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Create formatters
    console_formatter = logging.Formatter(
        fmt="%(asctime)s | %(name)-15s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_formatter = logging.Formatter(
        fmt="%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler (stderr keeps stdout free for CLI output)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()

    # Prevent duplicate logs if setup_logging() is called again
    if root_logger.handlers:
        root_logger.handlers.clear()

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            print(f"Warning: Could not open log file: {e}", file=sys.stderr)
        else:
            file_handler.setLevel(log_level)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)


# ═══════════════════════════════════════════════════════════════════════════════
# COMPONENT LOGGERS
# ═══════════════════════════════════════════════════════════════════════════════

# Initialize logging (call this once at app startup)
setup_logging(level="INFO")

# Component-specific loggers
logger_router = logging.getLogger("router.router")
logger_matcher = logging.getLogger("router.matcher")
logger_store = logging.getLogger("router.store")
logger_launcher = logging.getLogger("router.launcher")
logger_cli = logging.getLogger("router.cli")


# ═══════════════════════════════════════════════════════════════════════════════
# STRUCTURED LOGGING HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

class LogContext:
    """Helper for consistent structured logging"""

    @staticmethod
    def format_dict(data: dict) -> str:
        """Format dictionary for logging"""
        return " | ".join(f"{k}={v}" for k, v in data.items())

    @staticmethod
    def format_timing(duration_seconds: float) -> str:
        """Format timing information"""
        return f"{duration_seconds * 1000:.2f}ms"


# ═══════════════════════════════════════════════════════════════════════════════
# LOGGING UTILITIES
# ═══════════════════════════════════════════════════════════════════════════════

def log_route_start(intent_kind: str, raw_input: Optional[str], route_id: Optional[str] = None):
    """Log the start of a routing decision"""
    context = {"intent": intent_kind, "input": str(raw_input or "")[:100]}  # Truncate long shares
    if route_id:
        context["route_id"] = route_id
    logger_router.info(f"ROUTE_START | {LogContext.format_dict(context)}")


def log_route_transition(route_id: str, old_state: str, new_state: str):
    """Log a routing state transition"""
    logger_router.debug(f"ROUTE_STATE | route_id={route_id} | {old_state} -> {new_state}")


def log_route_outcome(route_id: str, status: str, host: Optional[str], app: Optional[str], duration_seconds: float):
    """Log the terminal outcome of a routing decision"""
    context = {
        "route_id": route_id,
        "status": status,
        "host": host,
        "app": app,
        "duration": LogContext.format_timing(duration_seconds)
    }
    level = logger_router.info if status == "launched" else logger_router.warning
    level(f"ROUTE_COMPLETE | {LogContext.format_dict(context)}")


def log_store_write(action: str, pattern: str, success: bool):
    """Log a pattern store write"""
    context = {"action": action, "pattern": pattern, "success": success}
    logger_store.info(f"STORE_WRITE | {LogContext.format_dict(context)}")
