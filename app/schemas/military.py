"""
Military API schemas.

Pydantic models for military request/response validation.  The grade is
not accepted on input; it is derived from the rank on output.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.roster.ranks import Grade, Rank, grade_for_rank
from app.roster.rest import as_date


# Shared properties
class MilitaryBase(BaseModel):
    """Base military schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    rank: Rank = Field(..., description="Posto/Graduação")
    branch: str = Field(..., min_length=1, max_length=100, description="Arma")
    squadron: str = Field(..., min_length=1, max_length=100, description="Esquadrão")
    war_name: Optional[str] = Field(None, max_length=100, description="Nome de guerra")
    formation_year: Optional[int] = Field(None, ge=1900, le=2100, description="Ano de formação")
    is_active: bool = True

    @field_validator("name", "branch", "squadron", "war_name", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


# Request schemas
class MilitaryCreate(MilitaryBase):
    """Schema for registering a military."""
    last_process_date: Optional[datetime.date] = Field(
        None, description="Last participation before the military was registered"
    )


class MilitaryUpdate(BaseModel):
    """Schema for updating a military.  Only the given fields change."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    rank: Optional[Rank] = None
    branch: Optional[str] = Field(None, min_length=1, max_length=100)
    squadron: Optional[str] = Field(None, min_length=1, max_length=100)
    war_name: Optional[str] = Field(None, max_length=100)
    formation_year: Optional[int] = Field(None, ge=1900, le=2100)
    is_active: Optional[bool] = None
    last_process_date: Optional[datetime.date] = None
    process_history: Optional[dict[str, Optional[datetime.date]]] = None

    @field_validator("name", "branch", "squadron", "war_name", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


# Response schemas
class MilitaryResponse(MilitaryBase):
    """Schema for military data in API responses."""
    id: int
    grade: Grade
    last_process_date: Optional[datetime.date]
    process_history: dict[str, Optional[datetime.date]]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True

    @classmethod
    def from_model(cls, military) -> "MilitaryResponse":
        return cls(id=military.id, name=military.name, rank=military.rank, grade=grade_for_rank(military.rank),
                   branch=military.branch, squadron=military.squadron, war_name=military.war_name,
                   formation_year=military.formation_year, is_active=military.is_active,
                   last_process_date=military.last_process_date,
                   process_history={ k: as_date(v) for k, v in (military.process_history or { }).items() },
                   created_at=military.created_at, updated_at=military.updated_at, )


class MilitarySummary(BaseModel):
    """Short form used inside process responses."""
    id: int
    name: str
    war_name: Optional[str] = None
    rank: Rank
    grade: Grade


# CSV import
class ImportRowError(BaseModel):
    line: int = Field(..., description="1-based line number in the uploaded file")
    message: str


class MilitaryImportResult(BaseModel):
    """Outcome of a CSV import (or its preview when ``dry_run``)."""
    dry_run: bool
    parsed: list[MilitaryCreate]
    imported: list[MilitaryResponse] = Field(default_factory=list)
    errors: list[ImportRowError] = Field(default_factory=list)
