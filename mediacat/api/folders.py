"""Music folder admin API: registry CRUD and catalog reassignment.

Thin router; all rules live in MusicFolderService.
"""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.folder import (
    MusicFolderCreate,
    MusicFolderUpdate,
    MusicFolderResponse,
    ReassignRequest,
    ReassignResponse,
)
from ..services.music_folder_service import MusicFolderService

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.get("", response_model=List[MusicFolderResponse])
def list_folders(
    include_disabled: bool = Query(True),
    db: Session = Depends(get_db),
):
    return MusicFolderService(db).list_folders(include_disabled=include_disabled)


@router.post("", response_model=MusicFolderResponse)
def create_folder(data: MusicFolderCreate, response: Response, db: Session = Depends(get_db)):
    """Register a folder. An already registered path returns the existing folder with 200."""
    folder, created = MusicFolderService(db).create_folder(data)
    response.status_code = 201 if created else 200
    return folder


# Declared before /{folder_id} so "reassign" is not parsed as an id.
@router.post("/reassign", response_model=ReassignResponse)
def reassign_folders(request: ReassignRequest, db: Session = Depends(get_db)):
    """Move catalog entries between two nested folders."""
    return MusicFolderService(db).reassign(request.from_id, request.to_id)


@router.get("/{folder_id}", response_model=MusicFolderResponse)
def get_folder(folder_id: int, db: Session = Depends(get_db)):
    return MusicFolderService(db).get_folder(folder_id)


@router.put("/{folder_id}", response_model=MusicFolderResponse)
def update_folder(folder_id: int, data: MusicFolderUpdate, db: Session = Depends(get_db)):
    return MusicFolderService(db).update_folder(folder_id, data)


@router.delete("/{folder_id}", status_code=204)
def delete_folder(folder_id: int, db: Session = Depends(get_db)):
    MusicFolderService(db).delete_folder(folder_id)
    return Response(status_code=204)
