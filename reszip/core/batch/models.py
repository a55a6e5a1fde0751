"""Batch processing models for reservation exports.

Type-safe models for batch input, per-reservation outcomes and results.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class ReservationRef:
    """One reservation to export, identified by hotel code and reservation id."""

    hotel_code: str
    reservation_id: str

    @property
    def label(self) -> str:
        return f"{self.hotel_code}-{self.reservation_id}"

    @property
    def filename(self) -> str:
        """Archive entry name, e.g. ``H1-99.pdf``."""
        return f"{self.label}.pdf"


@dataclass(frozen=True)
class FetchSuccess:
    """A retrieved reservation document."""

    ref: ReservationRef
    filename: str
    content: bytes

    ok = True

    @classmethod
    def for_ref(cls, ref: ReservationRef, content: bytes) -> "FetchSuccess":
        return cls(ref=ref, filename=ref.filename, content=content)


@dataclass(frozen=True)
class FetchFailure:
    """A reservation whose document could not be retrieved."""

    ref: ReservationRef
    reason: str

    ok = False


FetchOutcome = Union[FetchSuccess, FetchFailure]


@dataclass
class BatchResult:
    """Result of one batch run: every outcome, in input order."""

    batch_id: str
    outcomes: List[FetchOutcome]
    groups: int = 0
    processing_time_seconds: float = 0.0
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def successes(self) -> List[FetchSuccess]:
        return [o for o in self.outcomes if isinstance(o, FetchSuccess)]

    @property
    def failures(self) -> List[FetchFailure]:
        return [o for o in self.outcomes if isinstance(o, FetchFailure)]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def successful(self) -> int:
        return len(self.successes)

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def status(self) -> str:
        if self.successful == 0 and self.total > 0:
            return "failed"
        return "completed" if self.failed == 0 else "completed_with_errors"

    @classmethod
    def create(
        cls,
        batch_id: str,
        outcomes: List[FetchOutcome],
        groups: int,
        started_at: float,
    ) -> "BatchResult":
        """Factory method that stamps processing time from a ``time.time()`` start."""
        return cls(
            batch_id=batch_id,
            outcomes=outcomes,
            groups=groups,
            processing_time_seconds=round(time.time() - started_at, 2),
        )

    def summary(self) -> Dict[str, Any]:
        """Counts and failure reasons, without document bytes."""
        return {
            "batch_id": self.batch_id,
            "status": self.status,
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "groups": self.groups,
            "processing_time_seconds": self.processing_time_seconds,
            "failures": [
                {"htl_code": f.ref.hotel_code, "res_id": f.ref.reservation_id, "reason": f.reason}
                for f in self.failures
            ],
            "timestamp": self.timestamp,
        }
