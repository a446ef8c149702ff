"""
Rest days ("dias de folga").

The rest counter of a military is the number of whole days elapsed since
its last participation in a process, either any process or a given
process type.  A military that never participated gets a fixed sentinel
value so it sorts as the most rested.

Which date the counter starts from depends on the view:

- no process type: the overall ``last_process_date``;
- a process type: the per-type entry of ``process_history``.  A missing
  entry means the military never served in that type, so the sentinel
  applies even if it served in other types.

The date *shown* as "last participation" is a separate choice: the
per-type date when there is one, otherwise the overall date.
"""

from __future__ import annotations

import datetime
from typing import Mapping, Optional, Union

from pydantic import BaseModel, Field

DateLike = Union[datetime.date, datetime.datetime, str, None]

# ======================================================================
# Configuration
# ======================================================================


class RestConfig(BaseModel):
    """Thresholds of the rest-day computation."""

    sentinel_days: int = Field(365, ge=0, description="Rest days of a military that never participated")
    high_days: int = Field(90, ge=0)
    medium_days: int = Field(30, ge=0)

    @classmethod
    def from_settings(cls, settings) -> "RestConfig":
        return cls(sentinel_days=settings.REST_DAYS_SENTINEL, high_days=settings.REST_HIGH_DAYS,
                   medium_days=settings.REST_MEDIUM_DAYS, )


DEFAULT_REST_CONFIG = RestConfig()

# ======================================================================
# Dates
# ======================================================================


def as_date(value: DateLike) -> Optional[datetime.date]:
    """Normalise stored values (ISO strings from JSON, datetimes) to ``date``."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    # ISO date or datetime string, possibly with a trailing Z
    text = str(value).strip().replace("Z", "+00:00")
    try:
        return datetime.date.fromisoformat(text[:10])
    except ValueError:
        return datetime.datetime.fromisoformat(text).date()


def calculate_rest_days(last_date: DateLike, today: Optional[datetime.date] = None,
                        config: RestConfig = DEFAULT_REST_CONFIG, ) -> int:
    """Whole days between ``last_date`` and ``today``; the sentinel when never participated."""
    last = as_date(last_date)
    if last is None:
        return config.sentinel_days
    today = today or datetime.date.today()
    return (today - last).days


def rest_class(days: int, config: RestConfig = DEFAULT_REST_CONFIG) -> str:
    """Map rest days to ``high``, ``medium`` or ``low``."""
    if days >= config.high_days:
        return "high"
    if days >= config.medium_days:
        return "medium"
    return "low"


def reference_date(last_process_date: DateLike, process_history: Optional[Mapping[str, DateLike]],
                   process_type: Optional[str] = None, ) -> Optional[datetime.date]:
    """Date the rest counter starts from."""
    if process_type is None:
        return as_date(last_process_date)
    return as_date((process_history or { }).get(_type_key(process_type)))


def last_participation(last_process_date: DateLike, process_history: Optional[Mapping[str, DateLike]],
                       process_type: Optional[str] = None, ) -> Optional[datetime.date]:
    """Date displayed as the military's last participation."""
    if process_type is not None:
        typed = as_date((process_history or { }).get(_type_key(process_type)))
        if typed is not None:
            return typed
    return as_date(last_process_date)


def _type_key(process_type) -> str:
    return getattr(process_type, "value", process_type)
