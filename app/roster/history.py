"""
Participation history.

A military's ``process_history`` (process type -> last participation)
and ``last_process_date`` are derived data: they are rebuilt from the
processes the military is assigned to.  Types the military no longer
has an assignment in are dropped.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Mapping, NamedTuple, Optional

from app.roster.rest import DateLike, as_date


class ParticipationRecord(NamedTuple):
    """One assignment of a military: which type and when it started."""

    process_type: str
    start_date: datetime.date


class History(NamedTuple):
    process_history: dict[str, datetime.date]
    last_process_date: Optional[datetime.date]


def compute_history(records: Iterable[ParticipationRecord]) -> History:
    """Latest start date per process type, and overall."""
    per_type: dict[str, datetime.date] = { }
    latest: Optional[datetime.date] = None
    for record in records:
        key = getattr(record.process_type, "value", record.process_type)
        current = per_type.get(key)
        if current is None or record.start_date > current:
            per_type[key] = record.start_date
        if latest is None or record.start_date > latest:
            latest = record.start_date
    return History(process_history=per_type, last_process_date=latest)


def history_changed(stored_history: Optional[Mapping[str, DateLike]], stored_last: DateLike,
                    computed: History, ) -> bool:
    """Whether the stored values differ from ``computed``."""
    normalised = { k: as_date(v) for k, v in (stored_history or { }).items() if as_date(v) is not None }
    return normalised != computed.process_history or as_date(stored_last) != computed.last_process_date


def serialize_history(history: Mapping[str, Optional[datetime.date]]) -> dict[str, Optional[str]]:
    """JSON-storable form of a history mapping."""
    return { k: (v.isoformat() if v is not None else None) for k, v in history.items() }
