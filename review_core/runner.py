"""
Entry point: parse arguments, merge them over the saved config, start the
tracker, and block until interrupted (or until one cycle is done, --once).
"""

import os
import sys
import argparse
import threading

from .constants import CHECK_VERSION
from .config import (
    log, setup_logging, resolve_log_level, load_config, save_config,
    merge_config,
)
from .notify import log_notifier
from .state import TrackerConfig
from .tracker import ReviewTracker


def build_arg_parser():
    p = argparse.ArgumentParser(
        prog="gerrit-check",
        description="Watch a review server for changes to review and changes ready to submit.",
    )
    p.add_argument("--server", help="Review server base URL, e.g. https://review.example.com")
    p.add_argument("--project", help="Project to watch")
    p.add_argument("--user", dest="username", help="Username to watch reviews for")
    p.add_argument("--config", help="Path to JSON config file (default: ~/.gerrit-check/config.json)")
    p.add_argument("--interval", type=float, dest="pollIntervalSec",
                   help="Seconds between the end of one poll and the start of the next")
    p.add_argument("--timeout", type=float, dest="requestTimeoutSec",
                   help="Per-request HTTP timeout in seconds")
    p.add_argument("--keep-stale", action="store_true",
                   help="Keep revision counts of changes that are no longer pending")
    p.add_argument("--save", action="store_true", help="Persist the merged config and continue")
    p.add_argument("--once", action="store_true", help="Run one poll cycle and exit")
    p.add_argument("--log-level", default=None,
                   help="DEBUG/INFO/WARNING/ERROR. Defaults to env GERRIT_CHECK_LOG_LEVEL or INFO")
    p.add_argument("--version", action="version", version=f"%(prog)s {CHECK_VERSION}")
    return p


def settings_from_args(args, stored):
    overrides = {
        "server": args.server,
        "project": args.project,
        "username": args.username,
        "pollIntervalSec": args.pollIntervalSec,
        "requestTimeoutSec": args.requestTimeoutSec,
        "pruneStaleRevisions": False if args.keep_stale else None,
    }
    return merge_config(stored, overrides)


def main(argv=None):
    """Primary entry point. Returns a process exit code."""
    args = build_arg_parser().parse_args(argv)
    setup_logging(resolve_log_level(args.log_level or os.environ.get("GERRIT_CHECK_LOG_LEVEL")))

    settings = settings_from_args(args, load_config(args.config))
    if args.save:
        save_config(settings, args.config)

    if not TrackerConfig.from_dict(settings).is_complete:
        log.error("server, project and username are required (flags or config file)")
        return 2

    tracker = ReviewTracker.from_settings(settings)
    tracker.subscribe(log_notifier)
    log.info("gerrit-check v%s | interval=%ss", CHECK_VERSION, settings["pollIntervalSec"])

    if args.once:
        tracker.refresh()
        tracker.wait_idle()
        tracker.stop()
        return 0

    tracker.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        log.info("Stopped by user (Ctrl+C)")
    finally:
        tracker.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
