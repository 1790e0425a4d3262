"""Per-record outcome tracking for maintenance and migration runs.

A run never aborts on a single bad record.  Each record is reported as
succeeded, skipped or failed and the operator gets the totals at the end.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class OutcomeStatus(StrEnum):
    """What happened to a single record."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class RecordOutcome(BaseModel):
    """Result of processing one record."""

    record_id: int | str | None = None
    label: str = ""
    status: OutcomeStatus
    message: str = ""


class MaintenanceReport(BaseModel):
    """Accumulated outcomes of one maintenance or migration run."""

    operation: str
    dry_run: bool = False
    outcomes: list[RecordOutcome] = Field(default_factory=list)

    def _add(
        self, status: OutcomeStatus, record_id: int | str | None, label: str, message: str
    ) -> RecordOutcome:
        outcome = RecordOutcome(record_id=record_id, label=label, status=status, message=message)
        self.outcomes.append(outcome)
        return outcome

    def add_success(
        self, record_id: int | str | None, label: str = "", message: str = ""
    ) -> RecordOutcome:
        return self._add(OutcomeStatus.SUCCEEDED, record_id, label, message)

    def add_skip(
        self, record_id: int | str | None, label: str = "", message: str = ""
    ) -> RecordOutcome:
        return self._add(OutcomeStatus.SKIPPED, record_id, label, message)

    def add_error(
        self, record_id: int | str | None, label: str = "", message: str = ""
    ) -> RecordOutcome:
        logger.error("%s: %s (%s) failed: %s", self.operation, label, record_id, message)
        return self._add(OutcomeStatus.FAILED, record_id, label, message)

    def _with(self, status: OutcomeStatus) -> list[RecordOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> list[RecordOutcome]:
        return self._with(OutcomeStatus.SUCCEEDED)

    @property
    def skipped(self) -> list[RecordOutcome]:
        return self._with(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> list[RecordOutcome]:
        return self._with(OutcomeStatus.FAILED)

    @property
    def counts(self) -> dict[str, int]:
        return {status.value: len(self._with(status)) for status in OutcomeStatus}

    @property
    def ok(self) -> bool:
        """True when no record failed."""
        return not self.failed

    def summary(self) -> str:
        """One-line totals for log output."""
        c = self.counts
        prefix = "[dry run] " if self.dry_run else ""
        return (
            f"{prefix}{self.operation}: {c['succeeded']} succeeded, "
            f"{c['skipped']} skipped, {c['failed']} failed"
        )
