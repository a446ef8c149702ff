"""
Military service.

Business logic for military registration, edition and removal.  A
military referenced by any process assignment cannot be deleted.
"""

import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.db.repositories.military import MilitaryRepository
from app.models.military import Military
from app.models.timestamps import utcnow
from app.roster.history import serialize_history
from app.roster.ranking import military_matches
from app.roster.ranks import Grade, Rank, rank_index
from app.schemas.military import MilitaryCreate, MilitaryResponse, MilitaryUpdate

logger = logging.getLogger(__name__)

ASSIGNED_DELETE_MESSAGE = "Não é possível excluir este militar pois ele está designado em processos ativos."

# Columns that may not be cleared through an update
_REQUIRED_FIELDS = frozenset({ "name", "rank", "branch", "squadron", "is_active" })


class MilitaryService:
    """Service for military-related business logic."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.repository = MilitaryRepository(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all(self, rank: Optional[Rank] = None, grade: Optional[Grade] = None, query: Optional[str] = None,
             active: Optional[bool] = None, ) -> list[MilitaryResponse]:
        """
        List militaries sorted by rank order (lowest first).

        Args:
            rank: Only this rank
            grade: Only this grade
            query: Case-insensitive search on name, war name, rank, branch, squadron and grade
            active: Only militaries with this active flag

        Returns:
            List of militaries
        """
        responses = [MilitaryResponse.from_model(m) for m in self.repository.get_all(active=active)]
        responses = [m for m in responses if military_matches(m, grade=grade, rank=rank, query=query)]
        return sorted(responses, key=lambda m: rank_index(m.rank))

    def get(self, military_id: int) -> MilitaryResponse:
        return MilitaryResponse.from_model(self._get_or_404(military_id))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def create(self, data: MilitaryCreate) -> MilitaryResponse:
        """
        Register a new military.

        Args:
            data: Military registration data

        Returns:
            Created military
        """
        military = self.repository.create(self._from_schema(data))
        logger.info("Military %s (%s) created", military.id, military.name)
        return MilitaryResponse.from_model(military)

    def create_many(self, items: list[MilitaryCreate]) -> list[MilitaryResponse]:
        """Register several militaries at once (all or nothing)."""
        if not items:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Nenhum dado para importar")
        militaries = self.repository.create_many([self._from_schema(item) for item in items])
        logger.info("%d militaries created in bulk", len(militaries))
        return [MilitaryResponse.from_model(m) for m in militaries]

    def update(self, military_id: int, data: MilitaryUpdate) -> MilitaryResponse:
        """
        Update the fields present in ``data``.

        Raises:
            HTTPException 404: If the military does not exist
        """
        military = self._get_or_404(military_id)
        changes = data.model_dump(exclude_unset=True)

        for key, value in changes.items():
            if key in _REQUIRED_FIELDS and value is None:
                continue
            if key == "rank":
                value = Rank(value).value
            elif key == "process_history":
                value = serialize_history(value or { })
            setattr(military, key, value)

        military.updated_at = utcnow()
        military = self.repository.update(military)
        logger.info("Military %s updated (%s)", military.id, ", ".join(sorted(changes)) or "no fields")
        return MilitaryResponse.from_model(military)

    def delete(self, military_id: int) -> None:
        """
        Delete a military.

        Raises:
            HTTPException 404: If the military does not exist
            HTTPException 409: If the military is assigned to any process
        """
        military = self._get_or_404(military_id)
        if self.repository.is_assigned(military_id):
            logger.warning("Refused to delete military %s: assigned to a process", military_id)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ASSIGNED_DELETE_MESSAGE)
        self.repository.delete(military.id)
        logger.info("Military %s deleted", military_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_404(self, military_id: int) -> Military:
        military = self.repository.get_by_id(military_id)
        if not military:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Militar não encontrado")
        return military

    @staticmethod
    def _from_schema(data: MilitaryCreate) -> Military:
        return Military(name=data.name, rank=data.rank.value, branch=data.branch, squadron=data.squadron,
                        war_name=data.war_name, formation_year=data.formation_year, is_active=data.is_active,
                        last_process_date=data.last_process_date, process_history={ }, )
