"""
Process API schemas.

A process carries its assignment list inline.  Cardinality rules that
depend on the process type are checked at the service layer, where the
referenced militaries are also resolved.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.roster.catalogue import MilitaryFunction, ProcessClass, ProcessType
from app.schemas.military import MilitarySummary


class AssignedMilitary(BaseModel):
    """A military assigned to a process with its role."""

    military_id: int = Field(..., ge=1)
    function: MilitaryFunction = Field(..., description="Role inside the process")


class ProcessCreate(BaseModel):
    """Schema for creating a process."""

    type: ProcessType
    process_class: ProcessClass = Field(..., description="Supply class")
    number: Optional[str] = Field(None, max_length=50, description="Generated as NNN/YYYY when omitted")
    start_date: datetime.date
    end_date: Optional[datetime.date] = None
    material: Optional[str] = Field(None, max_length=1000)
    assigned_militaries: list[AssignedMilitary] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProcessUpdate(BaseModel):
    """Schema for updating a process.  A given assignment list replaces the stored one."""

    type: Optional[ProcessType] = None
    process_class: Optional[ProcessClass] = None
    number: Optional[str] = Field(None, min_length=1, max_length=50)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    material: Optional[str] = Field(None, max_length=1000)
    assigned_militaries: Optional[list[AssignedMilitary]] = None


class AssignmentResponse(BaseModel):
    military_id: int
    function: MilitaryFunction
    military: Optional[MilitarySummary] = None


class ProcessResponse(BaseModel):
    """Schema for process data in API responses."""

    id: int
    type: ProcessType
    process_class: ProcessClass
    number: str
    start_date: datetime.date
    end_date: Optional[datetime.date]
    status: str = Field(..., description="open or closed, derived from end_date")
    material: Optional[str]
    assigned_militaries: list[AssignmentResponse]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
