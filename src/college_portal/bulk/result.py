from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional


def _key_part(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


class WriteOutcome(str, Enum):
    """What the store did with one update-or-insert operation."""

    UPSERTED = "upserted"  # no record had the natural key; inserted
    MODIFIED = "modified"  # existing record overwritten with new values
    MATCHED = "matched"  # existing record already held identical values
    FAILED = "failed"


@dataclass(frozen=True)
class OperationResult:
    index: int
    key: tuple
    outcome: WriteOutcome
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "index": self.index,
            "key": [_key_part(k) for k in self.key],
            "outcome": self.outcome.value,
        }
        if self.error:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class BatchResult:
    """Aggregate of per-operation store results for one bulk submission.

    Failed operations are reported, never rolled back.
    """

    operations: tuple[OperationResult, ...] = field(default_factory=tuple)

    def _count(self, outcome: WriteOutcome) -> int:
        return sum(1 for op in self.operations if op.outcome == outcome)

    @property
    def total(self) -> int:
        return len(self.operations)

    @property
    def upserted_count(self) -> int:
        return self._count(WriteOutcome.UPSERTED)

    @property
    def modified_count(self) -> int:
        return self._count(WriteOutcome.MODIFIED)

    @property
    def matched_count(self) -> int:
        return self._count(WriteOutcome.MATCHED)

    @property
    def failed_count(self) -> int:
        return self._count(WriteOutcome.FAILED)

    @property
    def succeeded_count(self) -> int:
        return self.total - self.failed_count

    @property
    def ok(self) -> bool:
        return self.failed_count == 0

    @property
    def failures(self) -> list[OperationResult]:
        return [op for op in self.operations if op.outcome == WriteOutcome.FAILED]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "total": self.total,
            "upsertedCount": self.upserted_count,
            "modifiedCount": self.modified_count,
            "matchedCount": self.matched_count,
            "failedCount": self.failed_count,
            "writeErrors": [op.to_dict() for op in self.failures],
        }
