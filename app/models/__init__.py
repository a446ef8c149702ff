"""SQLModel database models."""

from app.models.military import Military
from app.models.process import Process, ProcessAssignment

__all__ = [
    "Military",
    "Process",
    "ProcessAssignment",
]
