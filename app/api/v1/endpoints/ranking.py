"""
Ranking, history and overview endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.config import settings
from app.db.session import get_db
from app.roster.catalogue import (MilitaryFunction, ProcessClass, ProcessType, assignment_rule, )
from app.roster.ranks import RANKS_ORDER, Grade, Rank, grade_for_rank
from app.schemas.ranking import (DashboardResponse, RankingOrder, RankingResponse, SyncHistoryResponse,
                                 TieBreak, )
from app.services.history_service import HistoryService
from app.services.ranking_service import RankingService

router = APIRouter()


@router.get("/ranking", summary="Militaries ranked by rest days.", response_model=RankingResponse, )
def get_ranking(process_type: Optional[ProcessType] = Query(None, description="Count rest per process type"),
                order: RankingOrder = Query("rank", description="rank: rank order then tie break; rest: rest only"),
                tie_break: TieBreak = Query("rest_days", description="Tie break inside a rank"),
                grade: Optional[Grade] = Query(None), rank: Optional[Rank] = Query(None),
                q: Optional[str] = Query(None, description="Search text"),
                active_only: bool = Query(True, description="Hide inactive militaries"),
                limit: Optional[int] = Query(None, ge=1, le=1000, description="Defaults to RANKING_DEFAULT_LIMIT"),
                show_all: bool = Query(False, description="Return every matching military"),
                db: Session = Depends(get_db), ):
    service = RankingService(db)
    effective_limit = None if show_all else (limit or settings.RANKING_DEFAULT_LIMIT)
    return service.ranking(process_type=process_type, order=order, tie_break=tie_break, grade=grade, rank=rank,
                           query=q, active_only=active_only, limit=effective_limit, )


@router.post("/sync-history", summary="Rebuild every military's participation history.",
             response_model=SyncHistoryResponse, )
def sync_history(db: Session = Depends(get_db)):
    service = HistoryService(db)
    return SyncHistoryResponse(success=True, updated_count=service.sync_all())


@router.get("/dashboard", summary="Overview figures.", response_model=DashboardResponse, )
def dashboard(db: Session = Depends(get_db)):
    service = RankingService(db)
    return service.dashboard()


@router.get("/catalogue", summary="Ranks, process types, classes and functions.", )
def catalogue():
    """Enumerations clients need to build their forms."""
    return {
        "ranks": [{ "rank": r.value, "grade": grade_for_rank(r).value, "order": i } for i, r in
                  enumerate(RANKS_ORDER)],
        "process_types": [{ "type": t.value, "minimum": assignment_rule(t).minimum, "exact": assignment_rule(t).exact }
                          for t in ProcessType],
        "process_classes": [c.value for c in ProcessClass],
        "functions": [f.value for f in MilitaryFunction],
    }
