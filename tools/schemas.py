"""
Router Schemas and Type Definitions

Defines Pydantic schemas for persisted patterns, launch targets and
routing outcomes, plus the enums that drive the routing state machine.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════════

class AppId(str, Enum):
    """The two fixed launch destinations."""
    PRIMARY = "primary"
    SECONDARY = "secondary"


class IntentKind(str, Enum):
    """
    Shape of the inbound trigger.

    SHARED_TEXT: free text from a share action (may contain a title + URL)
    VIEW_URI: an already-structured URI from a clicked link
    """
    SHARED_TEXT = "shared_text"
    VIEW_URI = "view_uri"


class RouteStatus(str, Enum):
    """Terminal result of one routing decision."""
    LAUNCHED = "launched"
    NO_URL_FOUND = "no_url_found"
    INVALID_URL = "invalid_url"
    APP_NOT_FOUND = "app_not_found"


class RouteState(str, Enum):
    """
    States of a single routing session.

    IDLE → EXTRACTING_URL → {NO_URL_FOUND | MATCHING}
    MATCHING → {INVALID_URL | LAUNCHING}
    LAUNCHING → {LAUNCHED | LAUNCH_FAILED}
    """
    IDLE = "idle"
    EXTRACTING_URL = "extracting_url"
    MATCHING = "matching"
    LAUNCHING = "launching"
    NO_URL_FOUND = "no_url_found"
    INVALID_URL = "invalid_url"
    LAUNCHED = "launched"
    LAUNCH_FAILED = "launch_failed"


TERMINAL_STATES = frozenset({
    RouteState.NO_URL_FOUND,
    RouteState.INVALID_URL,
    RouteState.LAUNCHED,
    RouteState.LAUNCH_FAILED,
})


# ═══════════════════════════════════════════════════════════════════════════════
# PERSISTED PATTERNS
# ═══════════════════════════════════════════════════════════════════════════════

class UrlPattern(BaseModel):
    """
    One row of the pattern table.

    Examples:
        - UrlPattern(id=1, pattern="github.com")  → github.com and *.github.com
        - UrlPattern(id=2, pattern=".lan")        → lan and *.lan
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Autoincrement row id")
    pattern: str = Field(..., min_length=1, description="Unique pattern text")

    @property
    def is_suffix(self) -> bool:
        return self.pattern.startswith(".")


# ═══════════════════════════════════════════════════════════════════════════════
# LAUNCH TARGETS
# ═══════════════════════════════════════════════════════════════════════════════

class AppTarget(BaseModel):
    """
    A configured application that can open URLs.

    Attributes:
        app_id: Which of the two slots this app fills
        name: Human label used in messages
        command: Executable name (looked up on PATH) or absolute path
    """
    model_config = ConfigDict(frozen=True)

    app_id: AppId
    name: str = Field(..., min_length=1)
    command: str = Field(..., min_length=1)


# ═══════════════════════════════════════════════════════════════════════════════
# ROUTING RESULTS
# ═══════════════════════════════════════════════════════════════════════════════

class LaunchOutcome(BaseModel):
    """Terminal outcome of Router.route(), with a user-facing message."""
    status: RouteStatus
    message: str
    url: Optional[str] = None
    host: Optional[str] = None
    app_id: Optional[AppId] = None
    app_name: Optional[str] = None
    matched: Optional[bool] = None

    @property
    def success(self) -> bool:
        return self.status == RouteStatus.LAUNCHED


class ShowMessage(BaseModel):
    """One-shot UI notification (duplicate pattern, invalid input)."""
    message: str
