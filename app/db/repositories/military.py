"""
Military repository.

Handles database operations for the Military model.
"""

from typing import Iterable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.military import Military
from app.models.process import ProcessAssignment


class MilitaryRepository:
    """Repository for Military database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def create(self, military: Military) -> Military:
        """
        Create a new military in the database.

        Args:
            military: Military instance to create

        Returns:
            Created military with generated id
        """
        self.session.add(military)
        self.session.commit()
        self.session.refresh(military)
        return military

    def create_many(self, militaries: list[Military]) -> list[Military]:
        """Insert several militaries in a single transaction."""
        self.session.add_all(militaries)
        self.session.commit()
        for military in militaries:
            self.session.refresh(military)
        return militaries

    def get_by_id(self, military_id: int) -> Optional[Military]:
        return self.session.get(Military, military_id)

    def get_by_ids(self, military_ids: Iterable[int]) -> list[Military]:
        ids = list(military_ids)
        if not ids:
            return []
        statement = select(Military).where(Military.id.in_(ids)).order_by(Military.id)
        return list(self.session.exec(statement).all())

    def get_all(self, active: Optional[bool] = None) -> list[Military]:
        """
        Get all militaries in insertion order.

        Args:
            active: When given, only militaries with this active flag

        Returns:
            List of militaries
        """
        statement = select(Military)
        if active is not None:
            statement = statement.where(Military.is_active == active)
        statement = statement.order_by(Military.id)
        return list(self.session.exec(statement).all())

    def count(self, active: Optional[bool] = None) -> int:
        statement = select(func.count()).select_from(Military)
        if active is not None:
            statement = statement.where(Military.is_active == active)
        return self.session.exec(statement).first() or 0

    def is_assigned(self, military_id: int) -> bool:
        """Whether any process references this military."""
        statement = select(ProcessAssignment.id).where(ProcessAssignment.military_id == military_id).limit(1)
        return self.session.exec(statement).first() is not None

    def update(self, military: Military) -> Military:
        self.session.add(military)
        self.session.commit()
        self.session.refresh(military)
        return military

    def update_many(self, militaries: list[Military]) -> None:
        """Persist several modified militaries in a single transaction."""
        if not militaries:
            return
        self.session.add_all(militaries)
        self.session.commit()

    def delete(self, military_id: int) -> bool:
        """
        Delete a military by ID.

        Args:
            military_id: Military ID to delete

        Returns:
            True if deleted, False if not found
        """
        military = self.get_by_id(military_id)
        if military:
            self.session.delete(military)
            self.session.commit()
            return True
        return False
