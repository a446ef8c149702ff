"""
Military database model.

Defines the militaries table.  ``process_history`` maps a process type
to the ISO date of the military's last participation in that type; it
and ``last_process_date`` are rebuilt from the assignments by the
history service.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from app.models.timestamps import timestamp_field


class Military(SQLModel, table=True):
    """
    A military that can be assigned to processes.

    The grade (officer/enlisted) is derived from ``rank`` and not stored.
    """
    __tablename__ = "militaries"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=255, index=True)
    rank: str = Field(nullable=False, max_length=50, index=True)
    branch: str = Field(nullable=False, max_length=100)
    squadron: str = Field(nullable=False, max_length=100)
    war_name: Optional[str] = Field(default=None, max_length=100)
    formation_year: Optional[int] = Field(default=None)
    is_active: bool = Field(default=True)

    # Derived participation data
    last_process_date: Optional[datetime.date] = Field(default=None)
    process_history: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )

    # Timestamps
    created_at: datetime.datetime = timestamp_field()
    updated_at: datetime.datetime = timestamp_field()
