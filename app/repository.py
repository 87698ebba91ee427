from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Literal
from uuid import UUID, uuid4

RecordType = Literal["score", "game_summary"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StoredRecord:
    id: UUID
    type: RecordType
    created_at: datetime
    expires_at: datetime
    data: dict


class ScoreRecordStore:
    """Short-lived score records, dropped once their TTL has passed."""

    def __init__(self, ttl_hours: int = 24, clock: Callable[[], datetime] = _utcnow) -> None:
        self._ttl = timedelta(hours=ttl_hours)
        self._clock = clock
        self._records: dict[UUID, StoredRecord] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._records)

    def _evict_expired(self) -> None:
        now = self._clock()
        for record_id in [rid for rid, rec in self._records.items() if rec.expires_at <= now]:
            del self._records[record_id]

    def add(self, record_type: RecordType, data: dict) -> StoredRecord:
        with self._lock:
            self._evict_expired()
            now = self._clock()
            record = StoredRecord(
                id=uuid4(),
                type=record_type,
                created_at=now,
                expires_at=now + self._ttl,
                data=data,
            )
            self._records[record.id] = record
            return record

    def get(self, record_id: UUID, record_type: RecordType | None = None) -> StoredRecord | None:
        with self._lock:
            self._evict_expired()
            record = self._records.get(record_id)
        if record is not None and record_type is not None and record.type != record_type:
            return None
        return record

    def get_many(self, record_ids: Iterable[UUID], record_type: RecordType) -> tuple[list[StoredRecord], list[UUID]]:
        """Returns (found records in request order, ids that are missing or of another type)."""
        found: list[StoredRecord] = []
        missing: list[UUID] = []
        for record_id in record_ids:
            record = self.get(record_id, record_type)
            if record is None:
                missing.append(record_id)
            else:
                found.append(record)
        return found, missing
