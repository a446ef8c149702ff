"""
Assignment eligibility ranking.

Two orderings are offered:

- ``rank``: lowest rank first, then a tie break inside each rank:
  ``rest_days`` (most rested first) or ``formation_year`` (most recent
  class first, unknown years last, then most rested first).
- ``rest``: most rested first regardless of rank.  This is the order of
  the assignment picker.

All sorts are stable, so militaries with equal keys keep the order they
were loaded in.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional, Sequence

from app.roster.ranks import Grade, Rank, grade_for_rank, rank_index
from app.roster.rest import (DEFAULT_REST_CONFIG, RestConfig, calculate_rest_days, last_participation,
                             reference_date, rest_class, )
from app.schemas.military import MilitaryResponse
from app.schemas.ranking import RankingEntry, RankingOrder, TieBreak


def build_entries(militaries: Iterable, process_type: Optional[str] = None, today: Optional[datetime.date] = None,
                  config: RestConfig = DEFAULT_REST_CONFIG, ) -> list[RankingEntry]:
    """Annotate each military with its rest counters."""
    today = today or datetime.date.today()
    entries = []
    for military in militaries:
        history = military.process_history or { }
        rest_days = calculate_rest_days(military.last_process_date, today, config)
        typed_days = None
        if process_type is not None:
            typed_days = calculate_rest_days(reference_date(military.last_process_date, history, process_type), today,
                                             config)
        effective = typed_days if typed_days is not None else rest_days
        entries.append(RankingEntry(military=MilitaryResponse.from_model(military), rest_days=rest_days,
                                    rest_days_for_process_type=typed_days, effective_rest_days=effective,
                                    last_participation=last_participation(military.last_process_date, history,
                                                                          process_type),
                                    rest_class=rest_class(effective, config), ))
    return entries


def _formation_key(entry: RankingEntry) -> tuple[int, int]:
    year = entry.military.formation_year
    if year is None:
        return 1, 0
    return 0, -year


def sort_entries(entries: Sequence[RankingEntry], order: RankingOrder = "rank",
                 tie_break: TieBreak = "rest_days", ) -> list[RankingEntry]:
    if order == "rest":
        return sorted(entries, key=lambda e: -e.effective_rest_days)

    if order != "rank":
        raise ValueError(f"Unknown ranking order: {order!r}")

    if tie_break == "rest_days":
        return sorted(entries, key=lambda e: (rank_index(e.military.rank), -e.effective_rest_days))
    if tie_break == "formation_year":
        return sorted(entries, key=lambda e: (rank_index(e.military.rank), _formation_key(e), -e.effective_rest_days))
    raise ValueError(f"Unknown tie break: {tie_break!r}")


def military_matches(military: MilitaryResponse, grade: Optional[Grade] = None, rank: Optional[Rank] = None,
                     query: Optional[str] = None, active_only: bool = False, ) -> bool:
    """Whether a military passes the grade/rank/search filters."""
    if active_only and not military.is_active:
        return False
    if grade is not None and grade_for_rank(military.rank) != Grade(grade):
        return False
    if rank is not None and military.rank != Rank(rank):
        return False
    if query and query.strip() and query.strip().lower() not in _haystack(military):
        return False
    return True


def filter_entries(entries: Iterable[RankingEntry], grade: Optional[Grade] = None, rank: Optional[Rank] = None,
                   query: Optional[str] = None, active_only: bool = True, ) -> list[RankingEntry]:
    return [e for e in entries if military_matches(e.military, grade, rank, query, active_only)]


def _haystack(military: MilitaryResponse) -> str:
    parts = [military.name, military.war_name or "", military.rank.value, military.branch, military.squadron,
             military.grade.value, ]
    return " ".join(parts).lower()


def rank_militaries(militaries: Iterable, process_type: Optional[str] = None, order: RankingOrder = "rank",
                    tie_break: TieBreak = "rest_days", grade: Optional[Grade] = None, rank: Optional[Rank] = None,
                    query: Optional[str] = None, active_only: bool = True, limit: Optional[int] = 10,
                    today: Optional[datetime.date] = None,
                    config: RestConfig = DEFAULT_REST_CONFIG, ) -> tuple[list[RankingEntry], int]:
    """Build, filter, sort and truncate.

    Returns:
        Tuple of (entries, total) where total counts matches before truncation.
    """
    entries = build_entries(militaries, process_type, today, config)
    entries = filter_entries(entries, grade=grade, rank=rank, query=query, active_only=active_only)
    entries = sort_entries(entries, order=order, tie_break=tie_break)
    for position, entry in enumerate(entries, start=1):
        entry.position = position
    total = len(entries)
    if limit is not None:
        entries = entries[:limit]
    return entries, total


def next_eligible(militaries: Iterable, count: int, process_type: Optional[str] = None,
                  exclude_ids: Iterable[int] = (), today: Optional[datetime.date] = None,
                  config: RestConfig = DEFAULT_REST_CONFIG, ) -> list[RankingEntry]:
    """The ``count`` most rested active militaries not in ``exclude_ids``."""
    excluded = set(exclude_ids)
    candidates = [m for m in militaries if m.id not in excluded]
    entries, _ = rank_militaries(candidates, process_type=process_type, order="rest", limit=count, today=today,
                                 config=config)
    return entries
