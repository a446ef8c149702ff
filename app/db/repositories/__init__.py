"""Database repositories."""

from app.db.repositories.military import MilitaryRepository
from app.db.repositories.process import ProcessRepository

__all__ = [
    "MilitaryRepository",
    "ProcessRepository",
]
