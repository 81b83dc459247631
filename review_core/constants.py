"""
Constants, intervals, timeouts, and the wire details of the review service.
"""

CHECK_VERSION = "1.0.0"

# ─── Intervals ───────────────────────────────────────────────────
POLL_INTERVAL_SEC = 300        # 5 min idle gap, measured from the end of the last poll
REQUEST_TIMEOUT_SEC = 30       # Per HTTP request (connect + read)

# ─── Retry (urllib3) ─────────────────────────────────────────────
RETRY_TOTAL = 3
RETRY_BACKOFF_FACTOR = 1       # Wait 1s, 2s, 4s between retries
RETRY_STATUS_FORCELIST = (502, 503, 504)

# Two queries in flight per cycle, so two pooled connections.
HTTP_POOL_SIZE = 2

# ─── Review service wire format ──────────────────────────────────
# Prepended to every JSON body to defeat cross-site script inclusion.
MAGIC_PREFIX = ")]}'"

PENDING_OPTION = "ALL_REVISIONS"
SUBMITTABLE_OPTION = "SUBMITTABLE"

# ─── Logging ─────────────────────────────────────────────────────
LOG_NAME = "gerrit-check"
LOG_MAX_BYTES = 1_000_000      # Log file is truncated at startup above this size
