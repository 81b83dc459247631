"""
FetchCoordinator — runs both change searches of a cycle concurrently and
joins them.

Each search runs on its own worker from a two-thread pool. run_poll()
waits on both futures (the join), converts anything a worker raised into a
failed PollOutcome, then hands both halves to the diff engine. The join
runs exactly once per call and only after both halves are done, whichever
finishes first and whether or not either failed.
"""

from concurrent.futures import ThreadPoolExecutor, wait

from .config import log
from .constants import REQUEST_TIMEOUT_SEC
from .api import fetch_changes
from .diff import compute_update
from .queries import build_queries
from .state import PollOutcome
from . import http_client


class FetchCoordinator:

    def __init__(self, fetch=fetch_changes, session=None,
                 timeout=REQUEST_TIMEOUT_SEC, prune_stale=True):
        self._fetch = fetch
        self._session = session if session is not None else http_client.create_session()
        self._timeout = timeout
        self._prune_stale = prune_stale
        self._pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="review-fetch")

    @property
    def session(self):
        return self._session

    def fetch_both(self, config):
        """Issue both searches concurrently. Returns (pending, submittable) outcomes."""
        pending_q, submittable_q = build_queries(config)
        futures = {
            "pending": self._pool.submit(
                self._fetch, self._session, config.server, pending_q,
                "pending", self._timeout,
            ),
            "submittable": self._pool.submit(
                self._fetch, self._session, config.server, submittable_q,
                "submittable", self._timeout,
            ),
        }

        # Join: both halves done. No timeout here; the transport bounds each call.
        wait(futures.values())

        outcomes = {}
        for label, future in futures.items():
            error = future.exception()
            if error is not None:
                log.error("%s fetch crashed: %s", label, error, exc_info=error)
                outcomes[label] = PollOutcome.failed(f"{type(error).__name__}: {error}")
            else:
                outcomes[label] = future.result()
        return outcomes["pending"], outcomes["submittable"]

    def run_poll(self, config, prior):
        """
        One full cycle against the prior snapshot.
        Returns (TrackerSnapshot, UpdateStatus).
        """
        pending, submittable = self.fetch_both(config)

        if not pending.succeeded and not submittable.succeeded:
            log.warning("Both queries failed — recreating HTTP session")
            self._session = http_client.reset_session(self._session)

        return compute_update(prior, pending, submittable, self._prune_stale)

    def shutdown(self):
        self._pool.shutdown(wait=False)
        self._session.close()
