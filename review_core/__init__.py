"""
review_core — poll a code-review server for a user's reviews
============================================================
Architecture: one scheduler thread per cycle, two fetch workers per cycle.

  constants.py    → Version, intervals, retry policy, wire constants
  config.py       → Paths, logging, config load/save/merge
  http_client.py  → HTTP session with retry/pooling + CA bundle
  queries.py      → The two change-search query strings
  decoder.py      → Strip )]}' and decode change records
  api.py          → One change search → PollOutcome (never raises)
  state.py        → TrackerConfig, ChangeRecord, TrackerSnapshot, UpdateStatus
  diff.py         → Snapshot diff → new snapshot + UpdateStatus
  poller.py       → FetchCoordinator (concurrent fetch + join)
  scheduler.py    → PollScheduler (single-flight, completion-relative timer)
  tracker.py      → ReviewTracker façade (configure/refresh/subscribe)
  notify.py       → UpdateStatus → title/message/icon for presenters
  runner.py       → main()
"""

from .state import TrackerConfig, TrackerSnapshot, UpdateStatus
from .tracker import ReviewTracker

__all__ = ["ReviewTracker", "TrackerConfig", "TrackerSnapshot", "UpdateStatus"]
