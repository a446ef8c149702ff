"""
Ranking service.

Loads militaries and feeds them to the pure ranking functions with the
rest thresholds from the settings.  Also builds the dashboard overview.
"""

import datetime
from collections import Counter
from typing import Optional

from sqlmodel import Session

from app.core.config import settings
from app.db.repositories.military import MilitaryRepository
from app.db.repositories.process import ProcessRepository
from app.roster.catalogue import ProcessType
from app.roster.ranking import build_entries, next_eligible, rank_militaries
from app.roster.ranks import Grade, Rank
from app.roster.rest import RestConfig
from app.schemas.ranking import DashboardResponse, RankingOrder, RankingResponse, TieBreak


class RankingService:
    """Service for rest-day ranking and overview figures."""

    def __init__(self, session: Session, config: Optional[RestConfig] = None):
        self.military_repo = MilitaryRepository(session)
        self.process_repo = ProcessRepository(session)
        self.config = config or RestConfig.from_settings(settings)

    def ranking(self, process_type: Optional[ProcessType] = None, order: RankingOrder = "rank",
                tie_break: TieBreak = "rest_days", grade: Optional[Grade] = None, rank: Optional[Rank] = None,
                query: Optional[str] = None, active_only: bool = True, limit: Optional[int] = None,
                today: Optional[datetime.date] = None, ) -> RankingResponse:
        entries, total = rank_militaries(self.military_repo.get_all(),
                                         process_type=process_type.value if process_type else None, order=order,
                                         tie_break=tie_break, grade=grade, rank=rank, query=query,
                                         active_only=active_only, limit=limit, today=today, config=self.config, )
        return RankingResponse(process_type=process_type, order=order, tie_break=tie_break, total=total,
                               entries=entries)

    def dashboard(self, today: Optional[datetime.date] = None, suggestions: int = 5) -> DashboardResponse:
        today = today or datetime.date.today()
        militaries = self.military_repo.get_all()
        active = [m for m in militaries if m.is_active]

        rest_classes = Counter({ "high": 0, "medium": 0, "low": 0 })
        rest_classes.update(e.rest_class for e in build_entries(active, today=today, config=self.config))

        return DashboardResponse(total_militaries=len(militaries), active_militaries=len(active),
                                 total_processes=self.process_repo.count(),
                                 open_processes=len(self.process_repo.get_all(status="open", today=today)),
                                 processes_by_type=self.process_repo.count_by_type(),
                                 militaries_by_rest_class=dict(rest_classes),
                                 next_eligible=next_eligible(active, suggestions, today=today, config=self.config), )
