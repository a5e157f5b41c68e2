"""
Test suite for the URL router (end-to-end with a real store and a fake launcher)
"""

import sys
import tempfile
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.config import DEFAULT_PATTERNS
from core.errors import AppNotFound, AlreadyExists
from core.pattern_store import PatternStore
from core.routing.router import Router, RoutingSession
from core.settings import SettingsFlag
from tools.schemas import AppId, AppTarget, IntentKind, RouteState, RouteStatus


PRIMARY = AppTarget(app_id=AppId.PRIMARY, name="Chrome", command="google-chrome")
SECONDARY = AppTarget(app_id=AppId.SECONDARY, name="Quetta", command="quetta")


# ═══════════════════════════════════════════════════════════════════════════
# FAKES
# ═══════════════════════════════════════════════════════════════════════════

class FakeLauncher:
    """Records launches; raises AppNotFound for targets listed as missing."""

    def __init__(self, missing=()):
        self.missing = set(missing)
        self.launched = []

    def launch(self, url, target):
        if target.app_id in self.missing:
            raise AppNotFound(target)
        self.launched.append((url, target.app_id))


def make_router(tmp_path, launcher=None, settings=None, extra_patterns=("github.com",)):
    store = PatternStore(tmp_path / "patterns.db", defaults=DEFAULT_PATTERNS)
    for pattern in extra_patterns:
        try:
            store.add(pattern)
        except AlreadyExists:
            pass

    launcher = launcher or FakeLauncher()
    router = Router(store, launcher, PRIMARY, SECONDARY, settings=settings)
    return router, store, launcher


# ═══════════════════════════════════════════════════════════════════════════
# TESTS
# ═══════════════════════════════════════════════════════════════════════════

def test_shared_text_matching_host_opens_primary(tmp_path):
    """Shared text with a stored domain goes to the primary app."""

    print("Testing primary routing...")

    router, _, launcher = make_router(tmp_path)
    outcome = router.route("see https://github.com/x", IntentKind.SHARED_TEXT)

    assert outcome.status == RouteStatus.LAUNCHED
    assert outcome.success == True
    assert outcome.host == "github.com"
    assert outcome.matched == True
    assert outcome.app_id == AppId.PRIMARY
    assert outcome.message == "Opened in Chrome"
    assert launcher.launched == [("https://github.com/x", AppId.PRIMARY)]

    print("✓ primary routing tests passed")


def test_shared_text_unmatched_host_opens_secondary(tmp_path):
    """Unknown hosts go to the secondary app."""

    print("Testing secondary routing...")

    router, _, launcher = make_router(tmp_path)
    outcome = router.route("see https://totallyrandom.example", IntentKind.SHARED_TEXT)

    assert outcome.status == RouteStatus.LAUNCHED
    assert outcome.matched == False
    assert outcome.app_id == AppId.SECONDARY
    assert launcher.launched == [("https://totallyrandom.example", AppId.SECONDARY)]

    print("✓ secondary routing tests passed")


def test_subdomains_and_suffix_patterns(tmp_path):
    """Seeded suffix patterns and subdomains route to primary."""

    print("Testing subdomain / suffix routing...")

    router, _, launcher = make_router(tmp_path)

    assert router.route("https://nas.lan/share", IntentKind.VIEW_URI).app_id == AppId.PRIMARY
    assert router.route("https://music.youtube.com/watch?v=1", IntentKind.VIEW_URI).app_id == AppId.PRIMARY
    assert router.route("https://notx.com/", IntentKind.VIEW_URI).app_id == AppId.SECONDARY

    # Host is lower-cased by the URL parser
    assert router.route("https://GitHub.COM/x", IntentKind.VIEW_URI).app_id == AppId.PRIMARY

    print("✓ subdomain / suffix tests passed")


def test_view_uri_skips_extraction(tmp_path):
    """A view URI is used as-is, even with an unusual scheme."""

    print("Testing view URI...")

    router, _, launcher = make_router(tmp_path)

    outcome = router.route("  ftp://github.com/file  ", IntentKind.VIEW_URI)
    assert outcome.status == RouteStatus.LAUNCHED
    assert outcome.url == "ftp://github.com/file"
    assert outcome.app_id == AppId.PRIMARY

    # The same text shared would not contain an http(s) link
    outcome = router.route("ftp://github.com/file", IntentKind.SHARED_TEXT)
    assert outcome.status == RouteStatus.NO_URL_FOUND

    print("✓ view URI tests passed")


def test_no_url_found(tmp_path):
    """Blank input and link-less text end in NO_URL_FOUND."""

    print("Testing NO_URL_FOUND...")

    router, _, launcher = make_router(tmp_path)

    for raw, kind in [(None, IntentKind.SHARED_TEXT), ("", IntentKind.VIEW_URI), ("   ", IntentKind.SHARED_TEXT)]:
        outcome = router.route(raw, kind)
        assert outcome.status == RouteStatus.NO_URL_FOUND
        assert outcome.message == "No valid URL found to process."

    outcome = router.route("no links here", IntentKind.SHARED_TEXT)
    assert outcome.status == RouteStatus.NO_URL_FOUND
    assert outcome.message == "No valid URL found in shared text."

    assert launcher.launched == []

    print("✓ NO_URL_FOUND tests passed")


def test_invalid_url(tmp_path):
    """Opaque or unparsable view URIs end in INVALID_URL."""

    print("Testing INVALID_URL...")

    router, _, launcher = make_router(tmp_path)

    for raw in ["data:text/plain,hello", "mailto:me@example.com", "http://[::1/", "just words"]:
        outcome = router.route(raw, IntentKind.VIEW_URI)
        assert outcome.status == RouteStatus.INVALID_URL, raw
        assert outcome.message == "Error: Invalid URL or pattern."

    assert launcher.launched == []

    print("✓ INVALID_URL tests passed")


def test_app_not_found(tmp_path):
    """A missing target app is reported with the attempted app."""

    print("Testing APP_NOT_FOUND...")

    router, _, launcher = make_router(tmp_path, launcher=FakeLauncher(missing={AppId.SECONDARY}))

    outcome = router.route("https://totallyrandom.example", IntentKind.VIEW_URI)
    assert outcome.status == RouteStatus.APP_NOT_FOUND
    assert outcome.app_id == AppId.SECONDARY
    assert outcome.app_name == "Quetta"
    assert outcome.message == "Error: App 'Quetta' is not installed."

    # Primary still works
    assert router.route("https://github.com", IntentKind.VIEW_URI).status == RouteStatus.LAUNCHED

    print("✓ APP_NOT_FOUND tests passed")


def test_unexpected_failures_become_outcomes(tmp_path):
    """Store and launcher crashes never escape route()."""

    print("Testing failure containment...")

    broken_store = MagicMock()
    broken_store.patterns.side_effect = RuntimeError("database is locked")
    router = Router(broken_store, FakeLauncher(), PRIMARY, SECONDARY)

    outcome = router.route("https://github.com", IntentKind.VIEW_URI)
    assert outcome.status == RouteStatus.INVALID_URL

    crashing_launcher = MagicMock()
    crashing_launcher.launch.side_effect = ValueError("boom")
    router, _, _ = make_router(tmp_path, launcher=crashing_launcher)

    outcome = router.route("https://github.com", IntentKind.VIEW_URI)
    assert outcome.status == RouteStatus.APP_NOT_FOUND
    assert outcome.app_id == AppId.PRIMARY

    # Unknown intent kind
    outcome = router.route("https://github.com", "carrier_pigeon")
    assert outcome.status == RouteStatus.INVALID_URL

    # Non-text input from a misbehaving host
    callback = MagicMock()
    outcome = router.route(12345, IntentKind.SHARED_TEXT, on_complete=callback)
    assert outcome.status == RouteStatus.INVALID_URL
    callback.assert_called_once_with(outcome)

    print("✓ failure containment tests passed")


def test_completion_signalled_exactly_once(tmp_path):
    """on_complete fires once per route(), whatever the outcome."""

    print("Testing completion signal...")

    router, _, _ = make_router(tmp_path, launcher=FakeLauncher(missing={AppId.PRIMARY}))

    cases = [
        ("https://github.com", IntentKind.VIEW_URI, RouteStatus.APP_NOT_FOUND),
        ("https://random.example", IntentKind.VIEW_URI, RouteStatus.LAUNCHED),
        ("nothing", IntentKind.SHARED_TEXT, RouteStatus.NO_URL_FOUND),
        ("data:x", IntentKind.VIEW_URI, RouteStatus.INVALID_URL),
    ]

    for raw, kind, expected in cases:
        callback = MagicMock()
        outcome = router.route(raw, kind, on_complete=callback)
        assert outcome.status == expected
        callback.assert_called_once_with(outcome)

    # A failing callback does not break routing
    outcome = router.route("https://random.example", IntentKind.VIEW_URI, on_complete=MagicMock(side_effect=RuntimeError("closed")))
    assert outcome.status == RouteStatus.LAUNCHED

    print("✓ completion signal tests passed")


def test_session_state_machine():
    """Sessions only move along allowed transitions and complete once."""

    print("Testing routing session...")

    session = RoutingSession()
    assert session.state == RouteState.IDLE
    session.transition(RouteState.EXTRACTING_URL)
    session.transition(RouteState.MATCHING)
    session.transition(RouteState.LAUNCHING)
    session.transition(RouteState.LAUNCHED)
    assert session.is_terminal == True

    with pytest.raises(RuntimeError):
        session.transition(RouteState.LAUNCHING)

    callback = MagicMock()
    session.complete("outcome", callback)
    session.complete("outcome", callback)
    callback.assert_called_once_with("outcome")

    print("✓ routing session tests passed")


def test_snapshot_reflects_latest_writes(tmp_path):
    """Routing reads the store as of the start of each decision."""

    print("Testing snapshot reads...")

    router, store, launcher = make_router(tmp_path)

    assert router.route("https://docs.example.net", IntentKind.VIEW_URI).app_id == AppId.SECONDARY
    store.add("example.net")
    assert router.route("https://docs.example.net", IntentKind.VIEW_URI).app_id == AppId.PRIMARY
    store.remove("example.net")
    assert router.route("https://docs.example.net", IntentKind.VIEW_URI).app_id == AppId.SECONDARY

    print("✓ snapshot read tests passed")


def test_debug_flag_passed_to_matcher(tmp_path):
    """Debug mode comes from the injected settings object."""

    print("Testing debug flag wiring...")

    settings = SettingsFlag(str(tmp_path / "settings.json"))
    router, _, _ = make_router(tmp_path, settings=settings)

    with patch("core.routing.router.matches", return_value=True) as mock_matches:
        router.route("https://a.com", IntentKind.VIEW_URI)
        assert mock_matches.call_args.kwargs["debug"] == False

        settings.set(True)
        router.route("https://a.com", IntentKind.VIEW_URI)
        assert mock_matches.call_args.kwargs["debug"] == True

    # Tracing does not change the decision
    assert router.route("https://totallyrandom.example", IntentKind.VIEW_URI).app_id == AppId.SECONDARY

    print("✓ debug flag tests passed")


def run_all_tests():
    """Run all test functions."""
    print("\n" + "="*60)
    print("Running Router Tests")
    print("="*60 + "\n")

    tests = [
        test_shared_text_matching_host_opens_primary,
        test_shared_text_unmatched_host_opens_secondary,
        test_subdomains_and_suffix_patterns,
        test_view_uri_skips_extraction,
        test_no_url_found,
        test_invalid_url,
        test_app_not_found,
        test_unexpected_failures_become_outcomes,
        test_completion_signalled_exactly_once,
        test_snapshot_reflects_latest_writes,
        test_debug_flag_passed_to_matcher,
    ]

    try:
        for test in tests:
            with tempfile.TemporaryDirectory() as tmp:
                test(Path(tmp))
        test_session_state_machine()

        print("\n" + "="*60)
        print("✅ ALL TESTS PASSED!")
        print("="*60 + "\n")

    except AssertionError as e:
        print("\n" + "="*60)
        print("❌ TEST FAILED!")
        print("="*60)
        print(f"Error: {e}\n")
        import traceback
        traceback.print_exc()
        raise


if __name__ == "__main__":
    run_all_tests()
