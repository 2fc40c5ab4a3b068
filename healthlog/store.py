"""
In-memory activity store.

One re-entrant lock guards the record table and the id counter. Every public
method holds it for its whole body, so readers never see a half-applied
mutation. Records handed out are copies; the store keeps the only writable
references.
"""

import logging
import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, Optional

from healthlog.catalog import (
    infer_category,
    is_predefined,
    list_predefined_types,
    resolve_activity_type,
)
from healthlog.config import HealthLogConfig
from healthlog.models import (
    ActivityCategory,
    ActivityInput,
    ActivityRecord,
    ActivityTypeInfo,
)

logger = logging.getLogger(__name__)


class StoreInvariantError(RuntimeError):
    """Internal state is inconsistent. Always a defect, never a normal outcome."""


class ActivityStore:
    """Thread-safe owner of all activity records."""

    def __init__(self, cfg: HealthLogConfig | None = None):
        self.cfg = cfg if cfg is not None else HealthLogConfig()
        self._predefined_names = [t.name for t in self.cfg.catalog.predefined_types]
        self._records: Dict[int, ActivityRecord] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    # -- Mutations -------------------------------------------------------

    def add(self, entry: ActivityInput) -> int:
        with self._lock:
            new_id = self._next_id
            if new_id in self._records:
                logger.error(f"Id counter at {new_id} collides with an existing record")
                raise StoreInvariantError(f"Id {new_id} already assigned")
            self._next_id += 1
            self._records[new_id] = ActivityRecord(
                id=new_id,
                activity_type=entry.activity_type,
                date=entry.date,
                value=entry.value,
                notes=entry.notes,
                duration=entry.duration,
                intensity=entry.intensity,
                created_at=datetime.now(),
            )
            logger.debug(f"Added record {new_id} ({entry.activity_type})")
            return new_id

    def update(self, record_id: int, entry: ActivityInput) -> bool:
        with self._lock:
            existing = self._records.get(record_id)
            if existing is None:
                logger.debug(f"Update skipped: record {record_id} not found")
                return False
            existing.activity_type = entry.activity_type
            existing.date = entry.date
            existing.value = entry.value
            existing.notes = entry.notes
            existing.duration = entry.duration
            existing.intensity = entry.intensity
            existing.updated_at = datetime.now()
            logger.debug(f"Updated record {record_id}")
            return True

    def delete(self, record_id: int) -> bool:
        with self._lock:
            if self._records.pop(record_id, None) is None:
                logger.debug(f"Delete skipped: record {record_id} not found")
                return False
            logger.debug(f"Deleted record {record_id}")
            return True

    # -- Single-record reads ---------------------------------------------

    def get_by_id(self, record_id: int) -> Optional[ActivityRecord]:
        with self._lock:
            record = self._records.get(record_id)
            return replace(record) if record is not None else None

    def exists(self, record_id: int) -> bool:
        with self._lock:
            return record_id in self._records

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def next_id(self) -> int:
        """The id the next `add` will assign."""
        with self._lock:
            return self._next_id

    # -- Collection reads ------------------------------------------------

    def _snapshot(self, predicate=None) -> List[ActivityRecord]:
        # Caller must hold the lock.
        return [
            replace(r) for r in self._records.values()
            if predicate is None or predicate(r)
        ]

    def get_all(self) -> List[ActivityRecord]:
        with self._lock:
            return self._snapshot()

    def get_by_type(self, activity_type: str) -> List[ActivityRecord]:
        wanted = activity_type.lower()
        with self._lock:
            return self._snapshot(lambda r: r.activity_type.lower() == wanted)

    def get_by_date_range(self, start: datetime, end: datetime) -> List[ActivityRecord]:
        with self._lock:
            return self._snapshot(lambda r: start <= r.date <= end)

    def get_by_category(self, category: ActivityCategory) -> List[ActivityRecord]:
        """
        Records whose type belongs to `category`.

        Membership is decided per type name: predefined names carry their
        declared category, every other stored name gets its inferred one.
        Records then match those names case-insensitively.
        """
        catalog = self.cfg.catalog
        with self._lock:
            names = {t.name.lower() for t in catalog.predefined_types if t.category == category}
            for stored in self._stored_type_names():
                if not is_predefined(stored, self.cfg) and infer_category(stored, catalog) == category:
                    names.add(stored.lower())
            return self._snapshot(lambda r: r.activity_type.lower() in names)

    def get_recent(self, n: int) -> List[ActivityRecord]:
        if n <= 0:
            return []
        with self._lock:
            ordered = sorted(
                self._records.values(),
                key=lambda r: (r.date, r.created_at, r.id),
                reverse=True,
            )
            return [replace(r) for r in ordered[:n]]

    def search(self, term: str) -> List[ActivityRecord]:
        needle = term.lower()
        with self._lock:
            return self._snapshot(
                lambda r: needle in r.activity_type.lower() or needle in (r.notes or "").lower()
            )

    # -- Aggregations ----------------------------------------------------

    def get_daily_totals(
        self,
        activity_type: str,
        start: datetime,
        end: datetime,
    ) -> Dict[date, float]:
        """Sum of values per calendar day, ascending; days without records are absent."""
        wanted = activity_type.lower()
        totals: Dict[date, float] = {}
        with self._lock:
            for r in self._records.values():
                if r.activity_type.lower() == wanted and start <= r.date <= end:
                    day = r.date.date()
                    totals[day] = totals.get(day, 0.0) + r.value
        return dict(sorted(totals.items()))

    def _stored_type_names(self) -> List[str]:
        # Caller must hold the lock. Distinct (case-sensitive) in first-seen order.
        return list(dict.fromkeys(r.activity_type for r in self._records.values()))

    def get_distinct_types(self) -> List[str]:
        """Predefined names in declaration order, then stored names in first-seen order."""
        with self._lock:
            seen = set()
            result = []
            for name in self._predefined_names + self._stored_type_names():
                key = name.lower()
                if key not in seen:
                    seen.add(key)
                    result.append(name)
            return result

    # -- Catalog passthrough ---------------------------------------------

    def get_type_info(self, activity_type: str) -> ActivityTypeInfo:
        return resolve_activity_type(activity_type, self.cfg)

    def list_predefined_types(self) -> List[ActivityTypeInfo]:
        return list_predefined_types(self.cfg)
