"""
Process service.

Validates assignments (known militaries, one role each, no duplicates,
the type's cardinality rule), stores the process with its assignment
rows and resynchronises the participation history of every military
whose assignments changed.
"""

import datetime
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.military import MilitaryRepository
from app.db.repositories.process import ProcessRepository
from app.models.process import Process, ProcessAssignment
from app.models.timestamps import utcnow
from app.roster.catalogue import ProcessType, check_assignment_count, generate_process_number
from app.roster.ranks import grade_for_rank
from app.schemas.military import MilitarySummary
from app.schemas.process import (AssignedMilitary, AssignmentResponse, ProcessCreate, ProcessResponse,
                                 ProcessUpdate, )
from app.services.history_service import HistoryService

logger = logging.getLogger(__name__)


class ProcessService:
    """Service for process business logic."""

    def __init__(self, session: Session):
        self.repository = ProcessRepository(session)
        self.military_repo = MilitaryRepository(session)
        self.history = HistoryService(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self, process_type: Optional[ProcessType] = None, military_id: Optional[int] = None,
                process_status: Optional[str] = None, ) -> list[ProcessResponse]:
        today = datetime.date.today()
        processes = self.repository.get_all(process_type=process_type.value if process_type else None,
                                            military_id=military_id, status=process_status, today=today, )
        assignments = self.repository.get_assignments_for_processes([p.id for p in processes])
        summaries = self._summaries({ a.military_id for rows in assignments.values() for a in rows })
        return [self._to_response(p, assignments[p.id], summaries, today) for p in processes]

    def get(self, process_id: int) -> ProcessResponse:
        process = self._get_or_404(process_id)
        assignments = self.repository.get_assignments(process.id)
        summaries = self._summaries(a.military_id for a in assignments)
        return self._to_response(process, assignments, summaries, datetime.date.today())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def create(self, data: ProcessCreate) -> ProcessResponse:
        self._validate_assignments(data.type, data.assigned_militaries)

        process = Process(type=data.type.value, process_class=data.process_class.value,
                          number=(data.number or "").strip() or generate_process_number(), start_date=data.start_date,
                          end_date=data.end_date, material=data.material, )
        process = self.repository.create(process, self._to_rows(data.assigned_militaries))
        logger.info("Process %s (%s %s) created with %d militaries", process.id, process.type, process.number,
                    len(data.assigned_militaries))

        self.history.sync_militaries(a.military_id for a in data.assigned_militaries)
        return self.get(process.id)

    def update(self, process_id: int, data: ProcessUpdate) -> ProcessResponse:
        process = self._get_or_404(process_id)
        previous_ids = { a.military_id for a in self.repository.get_assignments(process.id) }
        changes = data.model_dump(exclude_unset=True)

        new_type = data.type or ProcessType(process.type)
        start_date = data.start_date or process.start_date
        end_date = changes["end_date"] if "end_date" in changes else process.end_date
        if end_date is not None and end_date < start_date:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                detail="A data de término não pode ser anterior à data de início.", )

        rows = None
        if data.assigned_militaries is not None:
            self._validate_assignments(new_type, data.assigned_militaries)
            rows = self._to_rows(data.assigned_militaries)
        elif data.type is not None:
            # Type change keeps the current assignees; they must satisfy the new rule
            self._check_count(new_type, len(previous_ids))

        process.type = new_type.value
        if data.process_class is not None:
            process.process_class = data.process_class.value
        if data.number is not None:
            process.number = data.number.strip()
        process.start_date = start_date
        process.end_date = end_date
        if "material" in changes:
            process.material = data.material
        process.updated_at = utcnow()

        process = self.repository.update(process, rows)
        logger.info("Process %s updated (%s)", process.id, ", ".join(sorted(changes)) or "no fields")

        current_ids = { a.military_id for a in data.assigned_militaries } if rows is not None else previous_ids
        self.history.sync_militaries(previous_ids | current_ids)
        return self.get(process.id)

    def delete(self, process_id: int) -> None:
        process = self._get_or_404(process_id)
        affected = [a.military_id for a in self.repository.get_assignments(process.id)]
        self.repository.delete(process.id)
        logger.info("Process %s deleted", process_id)
        self.history.sync_militaries(affected)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate_assignments(self, process_type: ProcessType, assigned: list[AssignedMilitary]) -> None:
        ids = [a.military_id for a in assigned]

        duplicates = sorted({ i for i in ids if ids.count(i) > 1 })
        if duplicates:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                detail=f"Militares designados mais de uma vez: {duplicates}", )

        self._check_count(process_type, len(ids))

        known = { m.id for m in self.military_repo.get_by_ids(ids) }
        missing = [i for i in ids if i not in known]
        if missing:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                                detail=f"Militares não encontrados: {missing}", )

    @staticmethod
    def _check_count(process_type: ProcessType, count: int) -> None:
        message = check_assignment_count(process_type, count)
        if message:
            logger.warning("Rejected %s process with %d militaries", process_type.value, count)
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_404(self, process_id: int) -> Process:
        process = self.repository.get_by_id(process_id)
        if not process:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Processo não encontrado")
        return process

    def _summaries(self, military_ids) -> dict[int, MilitarySummary]:
        return { m.id: MilitarySummary(id=m.id, name=m.name, war_name=m.war_name, rank=m.rank,
                                       grade=grade_for_rank(m.rank))
                 for m in self.military_repo.get_by_ids(set(military_ids)) }

    @staticmethod
    def _to_rows(assigned: list[AssignedMilitary]) -> list[ProcessAssignment]:
        return [ProcessAssignment(military_id=a.military_id, function=a.function.value) for a in assigned]

    @staticmethod
    def _to_response(process: Process, assignments: list[ProcessAssignment], summaries: dict[int, MilitarySummary],
                     today: datetime.date, ) -> ProcessResponse:
        return ProcessResponse(id=process.id, type=process.type, process_class=process.process_class,
                               number=process.number, start_date=process.start_date, end_date=process.end_date,
                               status=process.status_on(today), material=process.material,
                               assigned_militaries=[AssignmentResponse(military_id=a.military_id,
                                                                       function=a.function,
                                                                       military=summaries.get(a.military_id))
                                                    for a in assignments],
                               created_at=process.created_at, updated_at=process.updated_at, )
