"""
Process repository.

Handles database operations for :class:`Process` and its
:class:`ProcessAssignment` rows.  A process and its assignments are
always written in the same transaction.
"""

import datetime
from typing import Optional

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from app.models.process import Process, ProcessAssignment


class ProcessRepository:
    """Repository for Process database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, process: Process, assignments: list[ProcessAssignment]) -> Process:
        self.session.add(process)
        self.session.flush()
        for position, assignment in enumerate(assignments):
            assignment.process_id = process.id
            assignment.position = position
            self.session.add(assignment)
        self.session.commit()
        self.session.refresh(process)
        return process

    def get_by_id(self, process_id: int) -> Optional[Process]:
        return self.session.get(Process, process_id)

    def get_all(self, process_type: Optional[str] = None, military_id: Optional[int] = None,
                status: Optional[str] = None, today: Optional[datetime.date] = None, ) -> list[Process]:
        """List processes in insertion order with optional filters."""
        statement = select(Process)
        if process_type is not None:
            statement = statement.where(Process.type == process_type)
        if military_id is not None:
            statement = statement.where(col(Process.id).in_(
                select(ProcessAssignment.process_id).where(ProcessAssignment.military_id == military_id)))
        if status is not None:
            today = today or datetime.date.today()
            open_clause = or_(col(Process.end_date).is_(None), col(Process.end_date) >= today)
            statement = statement.where(open_clause if status == "open" else ~open_clause)
        statement = statement.order_by(Process.id)
        return list(self.session.exec(statement).all())

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(Process)).first() or 0

    def count_by_type(self) -> dict[str, int]:
        statement = select(Process.type, func.count()).group_by(Process.type)
        return { row[0]: int(row[1]) for row in self.session.exec(statement).all() }

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    def get_assignments(self, process_id: int) -> list[ProcessAssignment]:
        statement = (select(ProcessAssignment).where(ProcessAssignment.process_id == process_id).order_by(
            ProcessAssignment.position))
        return list(self.session.exec(statement).all())

    def get_assignments_for_processes(self, process_ids: list[int]) -> dict[int, list[ProcessAssignment]]:
        grouped: dict[int, list[ProcessAssignment]] = { pid: [] for pid in process_ids }
        if not process_ids:
            return grouped
        statement = (select(ProcessAssignment).where(col(ProcessAssignment.process_id).in_(process_ids)).order_by(
            ProcessAssignment.process_id, ProcessAssignment.position))
        for assignment in self.session.exec(statement).all():
            grouped[assignment.process_id].append(assignment)
        return grouped

    def get_participations(self, military_ids: Optional[list[int]] = None) -> list[tuple[int, str, datetime.date]]:
        """``(military_id, process_type, start_date)`` for every assignment."""
        statement = select(ProcessAssignment.military_id, Process.type, Process.start_date).join(
            Process, Process.id == ProcessAssignment.process_id)
        if military_ids is not None:
            statement = statement.where(col(ProcessAssignment.military_id).in_(military_ids))
        return [(row[0], row[1], row[2]) for row in self.session.exec(statement).all()]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, process: Process, assignments: Optional[list[ProcessAssignment]] = None) -> Process:
        """Update a process; when ``assignments`` is given it replaces the stored list."""
        self.session.add(process)
        if assignments is not None:
            for existing in self.get_assignments(process.id):
                self.session.delete(existing)
            self.session.flush()
            for position, assignment in enumerate(assignments):
                assignment.process_id = process.id
                assignment.position = position
                self.session.add(assignment)
        self.session.commit()
        self.session.refresh(process)
        return process

    def delete(self, process_id: int) -> bool:
        process = self.get_by_id(process_id)
        if process:
            for assignment in self.get_assignments(process_id):
                self.session.delete(assignment)
            self.session.flush()
            self.session.delete(process)
            self.session.commit()
            return True
        return False
