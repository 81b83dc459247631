"""
Turns an UpdateStatus into the title/message/icon a presenter shows.

Priority: submittable news, then pending news, then the idle icon when
nothing is left in either list. Any other status means "leave the
presenter as it is" and yields None.
"""

from collections import namedtuple

from .config import log

Notice = namedtuple("Notice", ["title", "message", "icon"])

ICON_DEFAULT = "default"
ICON_READY = "ready"
ICON_PENDING = "pending"


def _commits(count):
    return f"{count} {'commits' if count > 1 else 'commit'}"


def describe(status):
    """Returns a Notice or None."""
    if status.has_new_submittable:
        return Notice("Ready to submit",
                      f"{_commits(status.submittable_count)} ready to submit",
                      ICON_READY)
    if status.has_new_pending:
        return Notice("Pending Reviews",
                      f"{_commits(status.pending_count)} to review",
                      ICON_PENDING)
    if status.pending_count == 0 and status.submittable_count == 0:
        return Notice("", "", ICON_DEFAULT)
    return None


def log_notifier(status):
    """Default subscriber: logs what a tray presenter would show."""
    notice = describe(status)
    if notice is None:
        log.info("No change | pending=%d | submittable=%d",
                 status.pending_count, status.submittable_count)
    elif notice.message:
        log.info("NOTIFY [%s] %s — %s", notice.icon, notice.title, notice.message)
    else:
        log.info("Nothing to review or submit")
