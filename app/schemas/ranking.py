"""
Ranking and overview schemas.

A ranking entry is a military annotated with its rest counters.  When a
process type is requested, ``effective_rest_days`` is the per-type
counter; otherwise it is the overall one.
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from app.roster.catalogue import ProcessType
from app.schemas.military import MilitaryResponse

RankingOrder = Literal["rank", "rest"]
TieBreak = Literal["rest_days", "formation_year"]


class RankingEntry(BaseModel):
    military: MilitaryResponse
    rest_days: int = Field(..., description="Days since the last participation in any process")
    rest_days_for_process_type: Optional[int] = Field(
        None, description="Days since the last participation in the requested process type"
    )
    effective_rest_days: int
    last_participation: Optional[datetime.date]
    rest_class: str = Field(..., description="high, medium or low")
    position: int = 0


class RankingResponse(BaseModel):
    process_type: Optional[ProcessType]
    order: RankingOrder
    tie_break: TieBreak
    total: int = Field(..., description="Entries matching the filters before truncation")
    entries: list[RankingEntry]


class SyncHistoryResponse(BaseModel):
    success: bool = True
    updated_count: int


class DashboardResponse(BaseModel):
    total_militaries: int
    active_militaries: int
    total_processes: int
    open_processes: int
    processes_by_type: dict[str, int]
    militaries_by_rest_class: dict[str, int]
    next_eligible: list[RankingEntry]
