"""
Query strings for the two change searches run each poll cycle.

Pure string construction; the Tracker rejects incomplete configs before
these are ever built.
"""

from urllib.parse import quote

from .constants import PENDING_OPTION, SUBMITTABLE_OPTION


def _term(value):
    # '+' separates search terms on the wire, so it must be escaped inside a value.
    return quote(value, safe="/@")


def pending_query(config):
    """Open changes in the project where the user reviews but does not own."""
    project = _term(config.project)
    user = _term(config.username)
    return (
        f"?q=status:open+project:{project}+reviewer:{user}+-owner:{user}"
        f"&o={PENDING_OPTION}"
    )


def submittable_query(config):
    """Open changes in the project owned by the user, with mergeability populated."""
    project = _term(config.project)
    user = _term(config.username)
    return f"?q=status:open+project:{project}+owner:{user}&o={SUBMITTABLE_OPTION}"


def build_queries(config):
    """Returns (pending, submittable)."""
    return pending_query(config), submittable_query(config)


def changes_url(server, query):
    return f"{server.rstrip('/')}/changes/{query}"
