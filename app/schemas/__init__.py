"""Pydantic schemas for request/response validation."""

from app.schemas.military import (
    ImportRowError,
    MilitaryCreate,
    MilitaryImportResult,
    MilitaryResponse,
    MilitarySummary,
    MilitaryUpdate,
)
from app.schemas.process import (
    AssignedMilitary,
    AssignmentResponse,
    ProcessCreate,
    ProcessResponse,
    ProcessUpdate,
)
from app.schemas.ranking import (
    DashboardResponse,
    RankingEntry,
    RankingResponse,
    SyncHistoryResponse,
)

__all__ = [
    "ImportRowError",
    "MilitaryCreate",
    "MilitaryImportResult",
    "MilitaryResponse",
    "MilitarySummary",
    "MilitaryUpdate",
    "AssignedMilitary",
    "AssignmentResponse",
    "ProcessCreate",
    "ProcessResponse",
    "ProcessUpdate",
    "DashboardResponse",
    "RankingEntry",
    "RankingResponse",
    "SyncHistoryResponse",
]
