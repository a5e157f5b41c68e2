"""
Domain Matcher

Decides whether a host belongs to a set of domain patterns.

Pattern shapes:
    ".example.com" - suffix pattern: example.com and any subdomain
    "example.com"  - base domain: itself and any subdomain

Comparison is exact: no case folding, no IDN/punycode handling.
"""

import sys
from typing import Iterable, Optional

from infra.logger import logger_matcher


# ═══════════════════════════════════════════════════════════════════════════
# SINGLE PATTERN
# ═══════════════════════════════════════════════════════════════════════════

def pattern_domain(pattern: str) -> str:
    """Strip the suffix marker: ".lan" → "lan", "x.com" → "x.com"."""
    return pattern[1:] if pattern.startswith(".") else pattern


def match_pattern(host: str, pattern: str) -> bool:
    """
    Check one pattern.

    Examples:
        match_pattern("foo.example.com", "example.com") → True
        match_pattern("notexample.com", "example.com")  → False
        match_pattern("a.lan", ".lan")                  → True
        match_pattern("alan", ".lan")                   → False
    """
    domain = pattern_domain(pattern)
    return host == domain or host.endswith("." + domain)


# ═══════════════════════════════════════════════════════════════════════════
# PATTERN SETS
# ═══════════════════════════════════════════════════════════════════════════

def first_match(host: str, patterns: Iterable[str], debug: bool = False) -> Optional[str]:
    """
    Return the first pattern that matches host, or None.

    Patterns are tried in the order given; later ones are never
    evaluated once a match is found.
    """
    if debug:
        _trace("--- Checking host: '%s' ---", host)

    for pattern in patterns:
        result = match_pattern(host, pattern)

        if debug:
            kind = "suffix" if pattern.startswith(".") else "base domain"
            _trace("Comparing '%s' against %s '%s'. Result: %s", host, kind, pattern, result)

        if result:
            return pattern

    return None


def matches(host: str, patterns: Iterable[str], debug: bool = False) -> bool:
    """
    Public API for domain matching.

    Args:
        host: Host domain from the parsed URL
        patterns: Ordered pattern snapshot
        debug: Log every comparison on the matcher logger

    Returns:
        True if any pattern matches, False otherwise (including empty sets)
    """
    return first_match(host, patterns, debug=debug) is not None


# ═══════════════════════════════════════════════════════════════════════════
# DEBUG TRACE
# ═══════════════════════════════════════════════════════════════════════════

def _trace(msg: str, *args):
    """Emit a debug trace line. Never raises into the matcher."""
    try:
        logger_matcher.info(msg, *args)
    except Exception as e:
        print(f"Warning: Could not write match trace: {e}", file=sys.stderr)
