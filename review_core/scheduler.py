"""
PollScheduler — single-flight, completion-relative polling timer.

States:
  IDLE     timer armed (or not yet started). A timer fire or request_poll()
           moves to POLLING and runs the cycle on a short-lived thread.
  POLLING  a cycle is outstanding. Timer fires and refresh requests are
           dropped, not queued.

When the cycle returns, the scheduler goes back to IDLE and arms a fresh
timer for `interval` seconds from that moment, so there is always a full
idle gap between polls however long the last one took.

request_poll(chain=True) made while POLLING is not dropped: it marks the
cycle in flight to be followed by one more, straight away and without
passing through IDLE. The mark is checked under the same lock that flips
the state back to IDLE, so a chained request can never fall into the gap
between the end of a cycle and the return to IDLE.
"""

import threading

from .config import log
from .constants import POLL_INTERVAL_SEC

IDLE = "idle"
POLLING = "polling"


class PollScheduler:

    def __init__(self, cycle, interval_sec=POLL_INTERVAL_SEC, timer_factory=threading.Timer):
        self._cycle = cycle
        self._interval = interval_sec
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._state = IDLE
        self._timer = None
        self._running = False
        self._chain = False
        self._idle = threading.Event()
        self._idle.set()

    # ─── State ───────────────────────────────────────────────

    @property
    def state(self):
        return self._state

    @property
    def in_progress(self) -> bool:
        return self._state == POLLING

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval(self):
        return self._interval

    # ─── Lifecycle ───────────────────────────────────────────

    def start(self):
        """Enable rearming after each cycle. Does not poll by itself."""
        with self._lock:
            self._running = True

    def stop(self):
        with self._lock:
            self._running = False
            self._cancel_timer()

    def wait_idle(self, timeout=None) -> bool:
        """Block until no cycle is in flight. Returns False on timeout."""
        return self._idle.wait(timeout)

    # ─── Triggers ────────────────────────────────────────────

    def request_poll(self, reason="refresh", chain=False) -> bool:
        """
        Start a cycle unless one is already in flight. Returns True if started.
        With chain=True an in-flight cycle is followed by one more instead.
        """
        with self._lock:
            if self._state == POLLING:
                if chain:
                    self._chain = True
                    log.debug("Poll in flight — %s request chained", reason)
                else:
                    log.debug("Poll in flight — dropping %s request", reason)
                return False
            self._state = POLLING
            self._idle.clear()
            self._cancel_timer()

        log.debug("Poll cycle starting (%s)", reason)
        threading.Thread(target=self._run_cycle, name="review-poll", daemon=True).start()
        return True

    def _on_timer(self):
        if not self._running:
            return
        self.request_poll("timer")

    # ─── Cycle ───────────────────────────────────────────────

    def _run_cycle(self):
        while True:
            try:
                self._cycle()
            except Exception as e:
                log.error("Poll cycle error: %s", e, exc_info=True)
            with self._lock:
                if self._chain:
                    self._chain = False
                    continue
                self._state = IDLE
                if self._running:
                    self._arm()
            break
        self._idle.set()

    def _arm(self):
        # Lock held by caller.
        self._cancel_timer()
        timer = self._timer_factory(self._interval, self._on_timer)
        timer.daemon = True
        timer.start()
        self._timer = timer
        log.debug("Next poll in %ss", self._interval)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
