"""
Router Configuration

Centralized configuration for the URI router.
Values can be overridden through URI_ROUTER_* environment variables
(a local .env file is loaded by infra.env).
"""

from typing import List

from infra.env import get_env, get_env_bool
from tools.schemas import AppId, AppTarget


# ═══════════════════════════════════════════════════════════════════════════════
# LAUNCH TARGETS
# ═══════════════════════════════════════════════════════════════════════════════

# Opened when the host matches a stored pattern
PRIMARY_APP = AppTarget(
    app_id=AppId.PRIMARY,
    name=get_env("URI_ROUTER_PRIMARY_NAME", "Chrome"),
    command=get_env("URI_ROUTER_PRIMARY_COMMAND", "google-chrome"),
)

# Opened for everything else
SECONDARY_APP = AppTarget(
    app_id=AppId.SECONDARY,
    name=get_env("URI_ROUTER_SECONDARY_NAME", "Quetta"),
    command=get_env("URI_ROUTER_SECONDARY_COMMAND", "quetta"),
)


# ═══════════════════════════════════════════════════════════════════════════════
# STORAGE
# ═══════════════════════════════════════════════════════════════════════════════

# SQLite database holding the pattern list
DB_PATH: str = get_env("URI_ROUTER_DB_PATH", "runtime/data/patterns.db")

# JSON file holding persisted settings (debug mode)
SETTINGS_PATH: str = get_env("URI_ROUTER_SETTINGS_PATH", "runtime/settings.json")


# ═══════════════════════════════════════════════════════════════════════════════
# PATTERNS
# ═══════════════════════════════════════════════════════════════════════════════

# Seeded into an empty store on first use
# - bare base domains match themselves and every subdomain
# - leading "." marks a suffix pattern (local / intranet names)
DEFAULT_PATTERNS: List[str] = [
    "google.com",
    "youtube.com",
    ".bruc",
    ".lan",
    "github.com",
    "grok.com",
    "x.com",
    "claude.ai",
]

# Longest pattern accepted by PatternStore.add() (DNS name limit)
MAX_PATTERN_LENGTH: int = 253


# ═══════════════════════════════════════════════════════════════════════════════
# LOGGING CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

# Log level for the application
LOG_LEVEL: str = get_env("URI_ROUTER_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR, CRITICAL

# Enable file logging
ENABLE_FILE_LOGGING: bool = get_env_bool("URI_ROUTER_FILE_LOGGING", True)

# Log file path
LOG_FILE_PATH: str = get_env("URI_ROUTER_LOG_FILE", "runtime/logs/router.log")


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════════════

def validate_config():
    """Validate configuration on startup"""
    assert PRIMARY_APP.app_id == AppId.PRIMARY, "PRIMARY_APP must use the primary slot"
    assert SECONDARY_APP.app_id == AppId.SECONDARY, "SECONDARY_APP must use the secondary slot"
    assert len(DEFAULT_PATTERNS) == len(set(DEFAULT_PATTERNS)), "DEFAULT_PATTERNS must be unique"
    assert all(p.strip(".") for p in DEFAULT_PATTERNS), "DEFAULT_PATTERNS must not be empty"
    assert MAX_PATTERN_LENGTH > 0, "MAX_PATTERN_LENGTH must be positive"


# Validate on import
validate_config()
