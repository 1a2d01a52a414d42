"""
Record Store for PrepCoach

Append-only storage of evaluation records keyed by user. Records are kept
in memory; the interface mirrors what a database-backed store would offer
so it can be swapped without touching callers.
"""

import logging

from prepcoach.models.evaluation import EvaluationRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """
    In-memory append-only record store.

    Each user has a version counter that increases on every append, so
    caches built from a user's history can tell when they are stale.
    """

    def __init__(self):
        self._records: dict[str, list[EvaluationRecord]] = {}
        self._versions: dict[str, int] = {}

    def append(self, record: EvaluationRecord) -> EvaluationRecord:
        """Store a new record. Existing records are never modified."""
        self._records.setdefault(record.user_id, []).append(record)
        self._versions[record.user_id] = self._versions.get(record.user_id, 0) + 1
        logger.info(
            f"Stored record {record.id} for user {record.user_id} "
            f"(score={record.score}, type={record.interview_type.value})"
        )
        return record

    def list_for_user(self, user_id: str) -> list[EvaluationRecord]:
        """All records for a user, most recent first."""
        # Reversed first so records sharing a timestamp come out newest-append first
        records = reversed(self._records.get(user_id, []))
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def recent_for_user(self, user_id: str, limit: int) -> list[EvaluationRecord]:
        """The ``limit`` most recent records for a user."""
        if limit <= 0:
            return []
        return self.list_for_user(user_id)[:limit]

    def version(self, user_id: str) -> int:
        """Number of appends seen for a user."""
        return self._versions.get(user_id, 0)
