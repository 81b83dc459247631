"""
Diff engine — decides whether a finished poll is worth a notification.

Inputs are the prior TrackerSnapshot and the two PollOutcomes of the cycle.
Output is a new snapshot plus the UpdateStatus to publish. Pure: the prior
snapshot is left untouched, the caller swaps in the new one.

Rules:
  submittable  news when the count changed, in either direction.
  pending      news when the count grew, when a known change gained or lost
               revisions, or when a new change shows up with ≥1 revision.
  failed side  keeps its prior count and revision map, reports no news.
               A transient outage must not read as "everything was merged".

Records are filtered by their own submittable flag as well as by which
query returned them; the two searches are disjoint by construction but
the engine does not rely on that.
"""

from .state import TrackerSnapshot, UpdateStatus


def submittable_records(outcome):
    return [r for r in outcome.records if r.is_submittable]


def pending_records(outcome):
    return [r for r in outcome.records if not r.is_submittable]


def diff_submittable(prior, outcome):
    """Returns (new_count, has_new)."""
    if not outcome.succeeded:
        return prior.submittable_count, False
    count = len(submittable_records(outcome))
    return count, count != prior.submittable_count


def diff_pending(prior, outcome, prune_stale=True):
    """Returns (new_count, new_revisions, has_new)."""
    if not outcome.succeeded:
        return prior.pending_count, dict(prior.pending_revisions), False

    records = pending_records(outcome)
    revisions = {} if prune_stale else dict(prior.pending_revisions)
    has_new = False
    for record in records:
        if record.revision_count != prior.revisions_for(record.id):
            has_new = True
        revisions[record.id] = record.revision_count

    count = len(records)
    # Net growth counts even when every individual revision count matches,
    # e.g. one change left and a zero-revision change entered.
    has_new = has_new or count > prior.pending_count
    return count, revisions, has_new


def compute_update(prior, pending, submittable, prune_stale=True):
    """
    Diff both halves of a cycle against the prior snapshot.
    Returns (TrackerSnapshot, UpdateStatus).
    """
    pending_count, revisions, has_new_pending = diff_pending(prior, pending, prune_stale)
    submittable_count, has_new_submittable = diff_submittable(prior, submittable)

    snapshot = TrackerSnapshot(
        pending_count=pending_count,
        submittable_count=submittable_count,
        pending_revisions=revisions,
    )
    status = UpdateStatus(
        has_new_pending=has_new_pending,
        has_new_submittable=has_new_submittable,
        in_progress=False,
        pending_complete=True,
        submittable_complete=True,
        pending_count=pending_count,
        submittable_count=submittable_count,
    )
    return snapshot, status
