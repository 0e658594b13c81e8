"""In-process snapshot store for local runs and tests."""

from __future__ import annotations

from core.errors import PersistenceError
from core.logging_config import get_logger
from core.types import SnapshotRecord

_LOGGER = get_logger(__name__)


class InMemorySnapshotStore:
    """Dict-backed store with the same last-write-wins upsert."""

    def __init__(self) -> None:
        self._records: dict[int, SnapshotRecord] = {}
        self._failure_message: str | None = None
        self.write_count = 0

    def upsert(self, record: SnapshotRecord) -> SnapshotRecord:
        """Replace the record stored under the record's timestamp.

        Args:
            record: Normalized snapshot record.

        Returns:
            Stored record.

        Raises:
            PersistenceError: If a simulated outage is active.
        """
        if self._failure_message is not None:
            _LOGGER.error(
                "snapshot_persist_failed",
                timestamp=record.timestamp,
                error=self._failure_message,
            )
            raise PersistenceError(self._failure_message)
        self._records[record.timestamp] = record
        self.write_count += 1
        _LOGGER.info("snapshot_persisted", timestamp=record.timestamp)
        return record

    def get(self, timestamp: int) -> SnapshotRecord | None:
        """Return the record stored for a timestamp, if any."""
        return self._records.get(timestamp)

    def __len__(self) -> int:
        return len(self._records)

    def fail_writes(self, message: str) -> None:
        """Make subsequent writes raise PersistenceError."""
        self._failure_message = message

    def restore_writes(self) -> None:
        """End a simulated outage."""
        self._failure_message = None
