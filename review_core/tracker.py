"""
ReviewTracker — owns the configuration and the current snapshot, runs poll
cycles through the scheduler, and publishes an UpdateStatus per cycle.

Shared state (config, snapshot, last status) is written only by the poll
cycle: a queued configure() is applied at the start of a cycle, results at
its join point. A configure() that arrives mid-poll chains one more cycle
straight after the one in flight, which applies it and polls.
"""

import threading

from .config import log, get_number
from .constants import POLL_INTERVAL_SEC, REQUEST_TIMEOUT_SEC
from .poller import FetchCoordinator
from .scheduler import PollScheduler
from .state import TrackerConfig, TrackerSnapshot, UpdateStatus


class ReviewTracker:
    """Poll–diff–notify engine for one user's reviews in one project."""

    def __init__(self, config=None, coordinator=None,
                 interval_sec=POLL_INTERVAL_SEC, timer_factory=threading.Timer):
        self._config = config or TrackerConfig()
        self._coordinator = coordinator or FetchCoordinator()
        self._snapshot = TrackerSnapshot()
        self._status = UpdateStatus()
        self._queued_config = None
        self._closed = False
        self._subscribers = []
        self._lock = threading.Lock()
        self._scheduler = PollScheduler(self._run_cycle, interval_sec, timer_factory)

    @classmethod
    def from_settings(cls, settings, **kwargs):
        """Build from a merged config dict (see config.merge_config)."""
        coordinator = FetchCoordinator(
            timeout=get_number(settings, "requestTimeoutSec", REQUEST_TIMEOUT_SEC),
            prune_stale=bool(settings.get("pruneStaleRevisions", True)),
        )
        return cls(
            config=TrackerConfig.from_dict(settings),
            coordinator=coordinator,
            interval_sec=get_number(settings, "pollIntervalSec", POLL_INTERVAL_SEC),
            **kwargs,
        )

    # ─── Read-only views ─────────────────────────────────────

    @property
    def config(self):
        return self._config

    @property
    def snapshot(self):
        return self._snapshot

    @property
    def in_progress(self) -> bool:
        return self._scheduler.in_progress

    @property
    def status(self):
        """Last published status, or an in-progress status while polling."""
        if self._scheduler.in_progress:
            snapshot = self._snapshot
            return UpdateStatus(
                in_progress=True,
                pending_count=snapshot.pending_count,
                submittable_count=snapshot.submittable_count,
            )
        return self._status

    @property
    def pending_count(self) -> int:
        return self._snapshot.pending_count

    @property
    def submittable_count(self) -> int:
        return self._snapshot.submittable_count

    # ─── Subscribers ─────────────────────────────────────────

    def subscribe(self, callback):
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback):
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    # ─── Commands ────────────────────────────────────────────

    def configure(self, server, project, username) -> bool:
        """
        Replace the configuration, reset counts, and poll now.
        The new config is applied at the start of the next cycle. If a cycle
        is in flight, another one is chained straight after it.
        Returns True if a poll started now; False if it was chained behind
        the cycle in flight, the configuration is incomplete, or the tracker
        is stopped.
        """
        config = TrackerConfig.from_dict(
            {"server": server, "project": project, "username": username}
        )
        with self._lock:
            if self._closed:
                log.warning("Tracker stopped — configure() ignored")
                return False
            self._queued_config = config
        started = self._scheduler.request_poll("configure", chain=True)
        if not started:
            log.info("Poll in flight — reconfiguration queued")
        return started and config.is_complete

    def refresh(self) -> bool:
        """Poll now unless a poll is already running. Returns True if started."""
        if self._closed:
            log.warning("Tracker stopped — refresh() ignored")
            return False
        if not self._config.is_complete:
            self._log_incomplete(self._config)
            return False
        return self._scheduler.request_poll("refresh")

    def start(self):
        """Start periodic polling. Polls immediately if configured."""
        self._scheduler.start()
        if self._config.is_complete:
            self.refresh()
        else:
            log.warning("Tracker started without a complete configuration — waiting for configure()")

    def stop(self):
        with self._lock:
            self._closed = True
        self._scheduler.stop()
        self._coordinator.shutdown()
        log.info("Tracker stopped.")

    def wait_idle(self, timeout=None) -> bool:
        return self._scheduler.wait_idle(timeout)

    # ─── Cycle (scheduler thread) ────────────────────────────

    def _run_cycle(self):
        with self._lock:
            queued, self._queued_config = self._queued_config, None
            if queued is not None:
                self._apply_config(queued)
            config = self._config
            prior = self._snapshot

        if not config.is_complete:
            self._log_incomplete(config)
            return

        log.info("Polling %s | project=%s | user=%s",
                 config.server, config.project, config.username)
        snapshot, status = self._coordinator.run_poll(config, prior)

        # Join point: the only place a cycle writes shared state.
        with self._lock:
            self._snapshot = snapshot
            self._status = status
            subscribers = list(self._subscribers)

        log.info(
            "Poll complete | pending=%d (new=%s) | submittable=%d (new=%s)",
            status.pending_count, status.has_new_pending,
            status.submittable_count, status.has_new_submittable,
        )
        self._publish(status, subscribers)

    def _publish(self, status, subscribers):
        for callback in subscribers:
            try:
                callback(status)
            except Exception as e:
                log.error("Subscriber %r failed: %s", callback, e, exc_info=True)

    def _apply_config(self, config):
        # Lock held by caller.
        self._config = config
        self._snapshot = TrackerSnapshot()
        self._status = UpdateStatus()
        log.info("Configured: server=%s project=%s user=%s",
                 config.server or "<unset>", config.project or "<unset>",
                 config.username or "<unset>")

    @staticmethod
    def _log_incomplete(config):
        missing = [name for name in ("server", "project", "username")
                   if not getattr(config, name)]
        log.warning("Poll skipped: missing %s", ", ".join(missing))
