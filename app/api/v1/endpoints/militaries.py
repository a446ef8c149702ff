"""
Military endpoints.

CRUD for militaries plus bulk creation and CSV import.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlmodel import Session

from app.db.session import get_db
from app.roster.ranks import Grade, Rank
from app.schemas.military import MilitaryCreate, MilitaryImportResult, MilitaryResponse, MilitaryUpdate
from app.services.military_import import MilitaryImportService
from app.services.military_service import MilitaryService

router = APIRouter()


@router.get("", summary="List militaries sorted by rank order.", response_model=list[MilitaryResponse], )
def list_militaries(rank: Optional[Rank] = Query(None, description="Exact rank filter"),
                    grade: Optional[Grade] = Query(None, description="Oficial or Praça"),
                    q: Optional[str] = Query(None, description="Search on name, war name, rank, branch, squadron"),
                    active: Optional[bool] = Query(None, description="Active flag filter"),
                    db: Session = Depends(get_db), ):
    service = MilitaryService(db)
    return service.get_all(rank=rank, grade=grade, query=q, active=active)


@router.post("", summary="Register a military.", response_model=MilitaryResponse,
             status_code=status.HTTP_201_CREATED, )
def create_military(data: MilitaryCreate, db: Session = Depends(get_db)):
    service = MilitaryService(db)
    return service.create(data)


@router.post("/bulk", summary="Register several militaries at once.", response_model=list[MilitaryResponse],
             status_code=status.HTTP_201_CREATED, )
def create_militaries(data: list[MilitaryCreate], db: Session = Depends(get_db)):
    service = MilitaryService(db)
    return service.create_many(data)


@router.post("/import", summary="Import militaries from a CSV file.", response_model=MilitaryImportResult, )
def import_militaries(file: UploadFile = File(..., description="CSV: Nome, Posto/Graduação, Arma, Grau"),
                      squadron: Optional[str] = Form(None, description="Squadron for rows without one"),
                      dry_run: bool = Query(False, description="Only parse and preview"),
                      db: Session = Depends(get_db), ):
    """
    Rows that fail validation are reported in ``errors`` and skipped;
    the others are imported.  With ``dry_run`` nothing is written.
    """
    content = file.file.read()
    service = MilitaryImportService(db)
    return service.import_csv(content, default_squadron=squadron, dry_run=dry_run)


@router.get("/{military_id}", summary="Get a military.", response_model=MilitaryResponse, )
def get_military(military_id: int, db: Session = Depends(get_db)):
    service = MilitaryService(db)
    return service.get(military_id)


@router.put("/{military_id}", summary="Update a military.", response_model=MilitaryResponse, )
def update_military(military_id: int, data: MilitaryUpdate, db: Session = Depends(get_db)):
    service = MilitaryService(db)
    return service.update(military_id, data)


@router.delete("/{military_id}", summary="Delete a military not assigned to any process.",
               status_code=status.HTTP_204_NO_CONTENT, )
def delete_military(military_id: int, db: Session = Depends(get_db)):
    service = MilitaryService(db)
    service.delete(military_id)
