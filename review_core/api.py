"""
Review service calls — one change search, decoded into a PollOutcome.

Blocking; runs on a fetch worker thread, never on the scheduler's thread.
Nothing raised here crosses into the coordinator: HTTP errors, network
errors and undecodable bodies all come back as a failed PollOutcome.
"""

import requests

from .config import log
from .constants import REQUEST_TIMEOUT_SEC
from .decoder import DecodeError, decode_changes
from .queries import changes_url
from .state import PollOutcome


def fetch_changes(session, server, query, label="changes", timeout=REQUEST_TIMEOUT_SEC):
    """GET {server}/changes/{query} and decode it. Returns a PollOutcome."""
    url = changes_url(server, query)
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        log.warning("%s query network error: %s", label, e)
        return PollOutcome.failed(f"{type(e).__name__}: {e}")

    if not 200 <= resp.status_code < 300:
        reason = getattr(resp, "reason", "") or ""
        log.warning("%s query failed: HTTP %d %s — %s",
                    label, resp.status_code, reason, resp.text[:200])
        return PollOutcome.failed(f"HTTP {resp.status_code} {reason}".strip())

    try:
        records = decode_changes(resp.content)
    except DecodeError as e:
        log.warning("%s query returned an undecodable body: %s", label, e)
        return PollOutcome.failed(f"DecodeError: {e}")

    log.debug("%s query OK | %d changes", label, len(records))
    return PollOutcome.ok(records)
