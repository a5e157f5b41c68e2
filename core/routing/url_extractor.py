"""
URL Extractor

Pulls the first http(s) URL out of free-form shared text and
extracts the host component of a candidate URL.
"""

import re
from typing import Optional
from urllib.parse import urlsplit


# ═══════════════════════════════════════════════════════════════════════════
# PATTERNS
# ═══════════════════════════════════════════════════════════════════════════

# Lower-case scheme only: "HTTP://" is not treated as a link
URL_RE = re.compile(r"https?://\S+")


# ═══════════════════════════════════════════════════════════════════════════
# URL EXTRACTION
# ═══════════════════════════════════════════════════════════════════════════

def extract_first_url(text: Optional[str]) -> Optional[str]:
    """
    Extract the first URL from mixed text content.

    Handles shares that carry a page title plus a link.

    Examples:
        "Check this out https://a.com/p?q=1 cool" → "https://a.com/p?q=1"
        "a http://x.org b https://y.org"           → "http://x.org"
        "no links here"                             → None
        "htt ps://broken"                           → None
    """
    if not text:
        return None

    match = URL_RE.search(text)
    return match.group(0) if match else None


# ═══════════════════════════════════════════════════════════════════════════
# HOST EXTRACTION
# ═══════════════════════════════════════════════════════════════════════════

def extract_host(url: Optional[str]) -> Optional[str]:
    """
    Get the host domain of a URL.

    Returns None when the URL does not parse or carries no authority
    (opaque URIs such as "mailto:" or "data:").
    """
    if not url:
        return None

    try:
        host = urlsplit(url).hostname
    except ValueError:
        # Unbalanced IPv6 brackets and similar
        return None

    return host or None
