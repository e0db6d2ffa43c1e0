"""Survey API ingestion."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

log = logging.getLogger(__name__)

_HEADERS = {"Accept": "javascript/json"}


def fetch_json(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> Optional[Any]:
    """GET *url* once and decode its JSON body.

    Returns None on transport errors, non-200 responses and undecodable
    bodies.  Failures are logged, never raised, and never retried: the next
    coverage miss is the retry.
    """
    try:
        resp = requests.get(url, params=params, headers=_HEADERS, timeout=timeout)
    except requests.RequestException as exc:
        log.warning("Network error on %s: %s", url[:80], exc)
        return None

    if resp.status_code != 200:
        log.warning("HTTP %d from %s", resp.status_code, url[:80])
        return None

    try:
        return resp.json()
    except ValueError:
        log.error("Error parsing response from %s: %.200s", url[:80], resp.text)
        return None
