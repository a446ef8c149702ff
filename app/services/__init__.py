"""Business logic services."""

from app.services.history_service import HistoryService
from app.services.military_import import MilitaryImportService
from app.services.military_service import MilitaryService
from app.services.process_service import ProcessService
from app.services.ranking_service import RankingService

__all__ = [
    "HistoryService",
    "MilitaryImportService",
    "MilitaryService",
    "ProcessService",
    "RankingService",
]
