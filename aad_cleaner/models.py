"""
Read-only records passed between the Graph queries and the retention evaluator
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class ApplicationRecord:
    id: str
    app_id: str
    display_name: str
    created_date_time: Optional[datetime] = None
    tags: Tuple[str, ...] = ()

    @classmethod
    def from_graph(cls, app) -> "ApplicationRecord":
        """Snapshot the fields we selected from a Graph Application model"""
        return cls(
            id=app.id,
            app_id=app.app_id,
            display_name=app.display_name or "",
            created_date_time=app.created_date_time,
            tags=tuple(app.tags or ()),
        )


@dataclass(frozen=True)
class SignInRecord:
    app_id: str
    created_date_time: Optional[datetime] = None

    @classmethod
    def from_graph(cls, sign_in) -> "SignInRecord":
        return cls(app_id=sign_in.app_id, created_date_time=sign_in.created_date_time)


@dataclass(frozen=True)
class RetentionVerdict:
    is_older_than_three_months: bool
    has_sign_in: bool
    has_not_expired: bool
    will_delete: bool


@dataclass
class CleanupSummary:
    report_only: bool
    evaluated: int = 0
    skipped: int = 0
    marked_for_deletion: int = 0
    deleted: int = 0
    failed_deletes: list = field(default_factory=list)
