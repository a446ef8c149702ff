"""
Process endpoints.

CRUD for processes and their assignments.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.db.session import get_db
from app.roster.catalogue import ProcessType
from app.schemas.process import ProcessCreate, ProcessResponse, ProcessUpdate
from app.services.process_service import ProcessService

router = APIRouter()


@router.get("", summary="List processes with optional filters.", response_model=list[ProcessResponse], )
def list_processes(type: Optional[ProcessType] = Query(None, description="Process type"),
                   military_id: Optional[int] = Query(None, description="Only processes this military is assigned to"),
                   status: Optional[Literal["open", "closed"]] = Query(None, description="open or closed"),
                   db: Session = Depends(get_db), ):
    service = ProcessService(db)
    return service.get_all(process_type=type, military_id=military_id, process_status=status)


@router.post("", summary="Create a process.", response_model=ProcessResponse, status_code=status.HTTP_201_CREATED, )
def create_process(data: ProcessCreate, db: Session = Depends(get_db)):
    service = ProcessService(db)
    return service.create(data)


@router.get("/{process_id}", summary="Get a process with its assigned militaries.",
            response_model=ProcessResponse, )
def get_process(process_id: int, db: Session = Depends(get_db)):
    service = ProcessService(db)
    return service.get(process_id)


@router.put("/{process_id}", summary="Update a process.", response_model=ProcessResponse, )
def update_process(process_id: int, data: ProcessUpdate, db: Session = Depends(get_db)):
    service = ProcessService(db)
    return service.update(process_id, data)


@router.delete("/{process_id}", summary="Delete a process.", status_code=status.HTTP_204_NO_CONTENT, )
def delete_process(process_id: int, db: Session = Depends(get_db)):
    service = ProcessService(db)
    service.delete(process_id)
