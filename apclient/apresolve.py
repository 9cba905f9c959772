"""Look up an access point address, with a fixed fallback."""

from __future__ import annotations

import json
import logging
import urllib.request

logger = logging.getLogger(__name__)

AP_FALLBACK = "ap.spotify.com:80"
APRESOLVE_ENDPOINT = "http://apresolve.spotify.com/"

_TIMEOUT = 10


class APResolveError(Exception):
    """Raised when the access point list cannot be obtained."""


def parse_apresolve_response(body: bytes) -> str:
    """Return the first access point from a resolver response body."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise APResolveError("invalid UTF8 in response") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise APResolveError("invalid JSON") from exc
    if not isinstance(data, dict):
        raise APResolveError("invalid JSON")
    ap_list = data.get("ap_list")
    if not isinstance(ap_list, list) or not all(isinstance(ap, str) for ap in ap_list):
        raise APResolveError("invalid JSON")
    if not ap_list:
        raise APResolveError("empty AP List")
    return ap_list[0]


def apresolve() -> str:
    """Ask the resolver service for an access point."""
    try:
        with urllib.request.urlopen(APRESOLVE_ENDPOINT, timeout=_TIMEOUT) as response:
            body = response.read()
    except OSError as exc:
        raise APResolveError("HTTP error") from exc
    return parse_apresolve_response(body)


def apresolve_or_fallback() -> str:
    """Resolve an access point, falling back to the fixed address on failure."""
    try:
        return apresolve()
    except APResolveError as exc:
        logger.warning("Failed to resolve Access Point: %s", exc)
        logger.warning('Using fallback "%s"', AP_FALLBACK)
        return AP_FALLBACK