"""
Routing Layer

Exposes URL extraction, domain matching and the router that ties them together.
"""

from .domain_matcher import matches, first_match
from .url_extractor import extract_first_url, extract_host
from .router import Router

__all__ = ["matches", "first_match", "extract_first_url", "extract_host", "Router"]
