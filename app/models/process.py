"""
Process database models.

A process (commission or administrative task) and the assignment rows
linking it to militaries.  An assignment row is what blocks a military
from being deleted.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from app.models.timestamps import timestamp_field


class Process(SQLModel, table=True):
    """An administrative process of a given type and supply class."""

    __tablename__ = "processes"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str = Field(nullable=False, max_length=100, index=True)
    process_class: str = Field(nullable=False, max_length=100)
    number: str = Field(nullable=False, max_length=50, index=True)
    start_date: datetime.date = Field(nullable=False, index=True)
    end_date: Optional[datetime.date] = Field(default=None)
    material: Optional[str] = Field(default=None, max_length=1000)

    # Timestamps
    created_at: datetime.datetime = timestamp_field()
    updated_at: datetime.datetime = timestamp_field()

    def status_on(self, today: datetime.date) -> str:
        """``open`` while the end date is unset or not yet reached."""
        if self.end_date is None or self.end_date >= today:
            return "open"
        return "closed"


class ProcessAssignment(SQLModel, table=True):
    """A military assigned to a process with a function."""

    __tablename__ = "process_assignments"
    __table_args__ = (UniqueConstraint("process_id", "military_id", name="uq_assignment_process_military"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    process_id: int = Field(foreign_key="processes.id", nullable=False, index=True)
    military_id: int = Field(foreign_key="militaries.id", nullable=False, index=True)
    function: str = Field(nullable=False, max_length=50)

    # Order in which the militaries were listed
    position: int = Field(default=0, nullable=False)
