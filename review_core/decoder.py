"""
Decodes a change-search response body into ChangeRecords.

The review service prefixes every JSON body with )]}' so the response is
not valid script if a hostile page includes it. One leading copy is removed,
the rest must be a JSON array of change objects.
"""

import json

from .constants import MAGIC_PREFIX
from .state import ChangeRecord


class DecodeError(ValueError):
    """Response body is not a change list."""


def strip_magic_prefix(body):
    """Remove exactly one leading MAGIC_PREFIX, if present."""
    if body.startswith(MAGIC_PREFIX):
        return body[len(MAGIC_PREFIX):]
    return body


def _revision_count(revisions):
    # Keyed by commit sha; some proxies flatten it to a list.
    if isinstance(revisions, (dict, list)):
        return len(revisions)
    return 0


def decode_change(item):
    if not isinstance(item, dict):
        raise DecodeError(f"Expected change object, got {type(item).__name__}")
    number = item.get("_number")
    if number is None:
        raise DecodeError("Change object has no _number")
    return ChangeRecord(
        id=str(number),
        is_submittable=item.get("submittable") is True,
        revision_count=_revision_count(item.get("revisions")),
    )


def decode_changes(body):
    """Parse a response body (str or bytes) into a list of ChangeRecord."""
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Body is not UTF-8: {e}") from e

    text = strip_magic_prefix(body.lstrip("\ufeff"))
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Malformed JSON: {e}") from e

    if not isinstance(data, list):
        raise DecodeError(f"Expected JSON array, got {type(data).__name__}")
    return [decode_change(item) for item in data]
