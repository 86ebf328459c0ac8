"""ImporterRecordStore: the single "currently displayed record" slot.

Lifecycle: select → LOADING, then exactly one of apply_full (PARTIAL / FULL)
or apply_error (ERRORED). Every apply is guarded by the selected target's
name: a result that arrives after the user moved on is dropped and the
apply call returns False.

A per-target busy count serializes refreshes with the initial fetch. A
refresh requested while the target is busy is rejected, not queued.
"""

import enum
import logging
from collections import Counter
from dataclasses import dataclass

from importer_intel.schemas.importer import DetailedImporterRecord, ImporterSummary

logger = logging.getLogger("intel.records")

DETAIL_ERROR_PREFIX = "Failed to load details: "


class RecordStatus(str, enum.Enum):
    LOADING = "loading"
    PARTIAL = "partial"
    FULL = "full"
    ERRORED = "errored"


@dataclass
class ActiveRecord:
    target: str
    status: RecordStatus
    record: DetailedImporterRecord
    error: str | None = None
    refreshing: bool = False
    refresh_error: str | None = None


def _loaded_status(record: DetailedImporterRecord) -> RecordStatus:
    return RecordStatus.FULL if record.is_loaded else RecordStatus.PARTIAL


class ImporterRecordStore:
    def __init__(self):
        self._active: ActiveRecord | None = None
        self._busy: Counter[str] = Counter()
        self._refreshing: set[str] = set()

    @property
    def active(self) -> ActiveRecord | None:
        return self._active

    def is_current(self, name: str) -> bool:
        return self._active is not None and self._active.target == name

    def is_busy(self, name: str) -> bool:
        return self._busy[name] > 0

    def select(self, summary: ImporterSummary) -> ActiveRecord:
        """Make a placeholder built from ``summary`` the active record right away."""
        self._active = ActiveRecord(
            target=summary.name,
            status=RecordStatus.LOADING,
            record=DetailedImporterRecord.placeholder(summary),
            refreshing=summary.name in self._refreshing,
        )
        logger.debug("Selected %r", summary.name)
        return self._active

    def close(self) -> None:
        self._active = None

    # --- Initial fetch ---

    def begin_fetch(self, name: str) -> None:
        self._busy[name] += 1

    def end_fetch(self, name: str) -> None:
        self._release(name)

    def apply_full(self, name: str, record: DetailedImporterRecord) -> bool:
        if not self.is_current(name):
            logger.info("Dropping stale detail result for %r", name)
            return False
        active = self._active
        active.record = record
        active.status = _loaded_status(record)
        active.error = None
        return True

    def apply_error(self, name: str, message: str) -> bool:
        """Annotate the current record with ``message``, keeping what it already shows."""
        if not self.is_current(name):
            logger.info("Dropping stale detail error for %r: %s", name, message)
            return False
        active = self._active
        active.record = active.record.model_copy(
            update={"information": f"{DETAIL_ERROR_PREFIX}{message}"}
        )
        active.status = RecordStatus.ERRORED
        active.error = message
        return True

    # --- Refresh ---

    def begin_refresh(self, name: str) -> bool:
        """Claim the busy flag for a refresh of the active record.

        Returns False when ``name`` is not the active target or when a fetch
        or refresh for it is still outstanding.
        """
        if not self.is_current(name) or self.is_busy(name):
            return False
        self._busy[name] += 1
        self._refreshing.add(name)
        self._active.refreshing = True
        self._active.refresh_error = None
        return True

    def apply_refresh(self, name: str, record: DetailedImporterRecord) -> bool:
        self._finish_refresh(name)
        if not self.is_current(name):
            logger.info("Dropping stale refresh result for %r", name)
            return False
        active = self._active
        active.record = record
        active.status = _loaded_status(record)
        active.error = None
        return True

    def fail_refresh(self, name: str, message: str) -> bool:
        """Report a refresh failure; the last displayed record stays as is."""
        self._finish_refresh(name)
        if not self.is_current(name):
            return False
        self._active.refresh_error = message
        return True

    # --- internals ---

    def _finish_refresh(self, name: str) -> None:
        self._refreshing.discard(name)
        self._release(name)
        if self.is_current(name):
            self._active.refreshing = False

    def _release(self, name: str) -> None:
        self._busy[name] -= 1
        if self._busy[name] <= 0:
            del self._busy[name]
