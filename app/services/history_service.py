"""
History service.

Rebuilds each military's ``process_history`` and ``last_process_date``
from the processes it is assigned to.  Only militaries whose stored
values differ from the computed ones are written.
"""

import datetime
import logging
from collections import defaultdict
from typing import Iterable, Optional

from sqlmodel import Session

from app.db.repositories.military import MilitaryRepository
from app.db.repositories.process import ProcessRepository
from app.models.timestamps import utcnow
from app.roster.history import ParticipationRecord, compute_history, history_changed, serialize_history

logger = logging.getLogger(__name__)


class HistoryService:
    """Service for participation history synchronisation."""

    def __init__(self, session: Session):
        self.military_repo = MilitaryRepository(session)
        self.process_repo = ProcessRepository(session)

    def sync_all(self) -> int:
        """Resynchronise every military.  Returns the number of militaries updated."""
        logger.info("Starting process history synchronization")
        updated = self._sync(self.military_repo.get_all(), self.process_repo.get_participations())
        logger.info("Process history synchronization completed: %d militaries updated", updated)
        return updated

    def sync_militaries(self, military_ids: Iterable[int]) -> int:
        """Resynchronise only the given militaries (after a process write)."""
        ids = sorted(set(military_ids))
        if not ids:
            return 0
        updated = self._sync(self.military_repo.get_by_ids(ids), self.process_repo.get_participations(ids))
        logger.debug("History resync for %s updated %d militaries", ids, updated)
        return updated

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _sync(self, militaries, participations: list[tuple[int, str, datetime.date]]) -> int:
        records: dict[int, list[ParticipationRecord]] = defaultdict(list)
        for military_id, process_type, start_date in participations:
            records[military_id].append(ParticipationRecord(process_type, start_date))

        changed = []
        now: Optional[datetime.datetime] = None
        for military in militaries:
            computed = compute_history(records.get(military.id, []))
            if not history_changed(military.process_history, military.last_process_date, computed):
                continue
            now = now or utcnow()
            military.process_history = serialize_history(computed.process_history)
            military.last_process_date = computed.last_process_date
            military.updated_at = now
            changed.append(military)

        self.military_repo.update_many(changed)
        return len(changed)
