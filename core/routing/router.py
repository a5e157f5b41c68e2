"""
URL Router

Picks which of the two configured applications opens an incoming URL.

Flow:
1. Resolve the raw input into a candidate URL (extract from shared text)
2. Parse the host domain
3. Snapshot the pattern store
4. Match host against the snapshot
5. Launch PRIMARY on match, SECONDARY otherwise

Every call ends in exactly one terminal LaunchOutcome and exactly one
completion callback.
"""

import time
import uuid
from typing import Callable, Optional, Union

from core.errors import (
    AppNotFound,
    MSG_INVALID_URL,
    MSG_NO_INPUT,
    MSG_NO_URL_IN_TEXT,
    app_not_found_message,
    launched_message,
)
from core.pattern_store import PatternStore
from core.routing.domain_matcher import matches
from core.routing.url_extractor import extract_first_url, extract_host
from core.settings import SettingsFlag
from infra.logger import (
    logger_router,
    log_route_start,
    log_route_transition,
    log_route_outcome,
)
from tools.launcher import Launcher
from tools.schemas import (
    AppTarget,
    IntentKind,
    LaunchOutcome,
    RouteState,
    RouteStatus,
    TERMINAL_STATES,
)


CompletionCallback = Callable[[LaunchOutcome], None]


# ═══════════════════════════════════════════════════════════════════════════════
# ROUTING SESSION (STATE MACHINE)
# ═══════════════════════════════════════════════════════════════════════════════

ALLOWED_TRANSITIONS = {
    RouteState.IDLE: {RouteState.EXTRACTING_URL},
    RouteState.EXTRACTING_URL: {RouteState.NO_URL_FOUND, RouteState.MATCHING, RouteState.INVALID_URL},
    RouteState.MATCHING: {RouteState.INVALID_URL, RouteState.LAUNCHING},
    RouteState.LAUNCHING: {RouteState.LAUNCHED, RouteState.LAUNCH_FAILED},
}


class RoutingSession:
    """
    State of one routing decision.

    Sessions are never shared between route() calls.
    """

    def __init__(self):
        self.route_id = str(uuid.uuid4())[:8]
        self.state = RouteState.IDLE
        self._completed = False

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def transition(self, new_state: RouteState):
        if new_state not in ALLOWED_TRANSITIONS.get(self.state, set()):
            raise RuntimeError(f"Illegal route transition: {self.state.value} -> {new_state.value}")

        log_route_transition(self.route_id, self.state.value, new_state.value)
        self.state = new_state

    def complete(self, outcome: LaunchOutcome, on_complete: Optional[CompletionCallback]):
        """Deliver the completion signal. Later calls are no-ops."""
        if self._completed:
            return
        self._completed = True

        if on_complete is None:
            return

        try:
            on_complete(outcome)
        except Exception as e:
            logger_router.error(f"COMPLETION_CALLBACK_FAILED | route_id={self.route_id} | error={str(e)}")


# ═══════════════════════════════════════════════════════════════════════════════
# ROUTER
# ═══════════════════════════════════════════════════════════════════════════════

class Router:
    """
    Routing orchestrator.

    Collaborators are injected so the decision logic stays testable:
    - store: read once per decision via patterns()
    - launcher: anything with launch(url, target) raising AppNotFound
    - settings: debug flag for match tracing
    """

    def __init__(
        self,
        store: PatternStore,
        launcher: Launcher,
        primary: AppTarget,
        secondary: AppTarget,
        settings: Optional[SettingsFlag] = None,
    ):
        self.store = store
        self.launcher = launcher
        self.primary = primary
        self.secondary = secondary
        self.settings = settings

    def route(
        self,
        raw_input: Optional[str],
        intent_kind: Union[IntentKind, str],
        on_complete: Optional[CompletionCallback] = None,
    ) -> LaunchOutcome:
        """
        Route one inbound share / view.

        Args:
            raw_input: Shared text or view URI (may be None)
            intent_kind: IntentKind.SHARED_TEXT or IntentKind.VIEW_URI
            on_complete: Called exactly once with the terminal outcome

        Returns:
            LaunchOutcome (never raises)
        """
        session = RoutingSession()
        start_time = time.perf_counter()

        kind_label = intent_kind.value if isinstance(intent_kind, IntentKind) else str(intent_kind)
        log_route_start(kind_label, raw_input, route_id=session.route_id)

        try:
            outcome = self._run(session, raw_input, intent_kind)
        except Exception as e:
            logger_router.error(f"ROUTE_FAILED | route_id={session.route_id} | state={session.state.value} | error={str(e)}")
            outcome = LaunchOutcome(status=RouteStatus.INVALID_URL, message=MSG_INVALID_URL)

        log_route_outcome(
            session.route_id,
            outcome.status.value,
            outcome.host,
            outcome.app_name,
            time.perf_counter() - start_time
        )

        session.complete(outcome, on_complete)
        return outcome

    # ---------- pipeline ----------
    def _run(self, session: RoutingSession, raw_input: Optional[str], intent_kind) -> LaunchOutcome:
        # Step 1: Candidate URL
        session.transition(RouteState.EXTRACTING_URL)

        if raw_input is None or not raw_input.strip():
            session.transition(RouteState.NO_URL_FOUND)
            return LaunchOutcome(status=RouteStatus.NO_URL_FOUND, message=MSG_NO_INPUT)

        try:
            url = self._resolve_candidate(raw_input, IntentKind(intent_kind))
        except Exception as e:
            logger_router.error(f"EXTRACT_FAILED | route_id={session.route_id} | error={str(e)}")
            session.transition(RouteState.INVALID_URL)
            return LaunchOutcome(status=RouteStatus.INVALID_URL, message=MSG_INVALID_URL)

        if url is None:
            session.transition(RouteState.NO_URL_FOUND)
            return LaunchOutcome(status=RouteStatus.NO_URL_FOUND, message=MSG_NO_URL_IN_TEXT)

        # Steps 2-4: Host, snapshot, match
        session.transition(RouteState.MATCHING)

        try:
            host = extract_host(url)
            if host is None:
                session.transition(RouteState.INVALID_URL)
                return LaunchOutcome(status=RouteStatus.INVALID_URL, message=MSG_INVALID_URL, url=url)

            snapshot = self.store.patterns()
            matched = matches(host, snapshot, debug=self._debug_enabled())

        except Exception as e:
            logger_router.error(f"MATCH_FAILED | route_id={session.route_id} | error={str(e)}")
            session.transition(RouteState.INVALID_URL)
            return LaunchOutcome(status=RouteStatus.INVALID_URL, message=MSG_INVALID_URL, url=url)

        # Step 5: Target
        target = self.primary if matched else self.secondary

        # Step 6: Launch
        session.transition(RouteState.LAUNCHING)
        failure = self._launch(session, url, target)

        if failure is not None:
            session.transition(RouteState.LAUNCH_FAILED)
            logger_router.error(f"TARGET_UNAVAILABLE | route_id={session.route_id} | app={target.name} | error={failure}")
            return LaunchOutcome(
                status=RouteStatus.APP_NOT_FOUND,
                message=app_not_found_message(target),
                url=url,
                host=host,
                app_id=target.app_id,
                app_name=target.name,
                matched=matched,
            )

        session.transition(RouteState.LAUNCHED)
        return LaunchOutcome(
            status=RouteStatus.LAUNCHED,
            message=launched_message(target),
            url=url,
            host=host,
            app_id=target.app_id,
            app_name=target.name,
            matched=matched,
        )

    def _resolve_candidate(self, raw_input: str, intent_kind: IntentKind) -> Optional[str]:
        """View URIs are already URLs; shared text goes through the extractor."""
        if intent_kind == IntentKind.VIEW_URI:
            return raw_input.strip()
        return extract_first_url(raw_input)

    def _launch(self, session: RoutingSession, url: str, target: AppTarget) -> Optional[str]:
        """Launch and return an error description, or None on success."""
        try:
            self.launcher.launch(url, target)
        except AppNotFound as e:
            return str(e)
        except Exception as e:
            logger_router.error(f"LAUNCH_ERROR | route_id={session.route_id} | error={str(e)}")
            return str(e)
        return None

    def _debug_enabled(self) -> bool:
        return self.settings.get() if self.settings is not None else False
