"""
Value types shared by the poll–diff–notify engine.

TrackerSnapshot is the only durable state. It is never mutated: the join
point builds a new snapshot and the Tracker swaps its reference in one
assignment. ChangeRecord and PollOutcome live for a single poll cycle.
UpdateStatus is what subscribers receive, and is frozen once published.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Tuple, Mapping


@dataclass(frozen=True)
class TrackerConfig:
    server: str = ""
    project: str = ""
    username: str = ""

    @classmethod
    def from_dict(cls, data):
        """Build from a config dict. Strips whitespace and a trailing '/' on server."""
        server = str(data.get("server") or "").strip().rstrip("/")
        project = str(data.get("project") or "").strip()
        username = str(data.get("username") or "").strip()
        return cls(server=server, project=project, username=username)

    @property
    def is_complete(self) -> bool:
        return bool(self.server and self.project and self.username)


@dataclass(frozen=True)
class ChangeRecord:
    id: str
    is_submittable: bool
    revision_count: int


@dataclass(frozen=True)
class PollOutcome:
    succeeded: bool
    records: Tuple[ChangeRecord, ...] = ()
    error: Optional[str] = None

    @classmethod
    def ok(cls, records):
        return cls(succeeded=True, records=tuple(records))

    @classmethod
    def failed(cls, error):
        return cls(succeeded=False, error=str(error))


@dataclass(frozen=True)
class TrackerSnapshot:
    pending_count: int = 0
    submittable_count: int = 0
    pending_revisions: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only copy; the caller's dict and the snapshot never alias.
        object.__setattr__(self, "pending_revisions",
                           MappingProxyType(dict(self.pending_revisions)))

    def revisions_for(self, change_id) -> int:
        """Stored revision count for a change; 0 when never seen."""
        return self.pending_revisions.get(change_id, 0)


@dataclass(frozen=True)
class UpdateStatus:
    has_new_pending: bool = False
    has_new_submittable: bool = False
    in_progress: bool = False
    pending_complete: bool = False
    submittable_complete: bool = False
    pending_count: int = 0
    submittable_count: int = 0

    @property
    def update_complete(self) -> bool:
        return self.pending_complete and self.submittable_complete

    @property
    def has_news(self) -> bool:
        return self.has_new_pending or self.has_new_submittable
