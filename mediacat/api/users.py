"""User admin API: user population and per-user folder visibility."""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.folder import MusicFolderResponse, UserCreate, UserFoldersUpdate
from ..services.music_folder_service import MusicFolderService
from ..services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[str])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_usernames()


@router.post("", status_code=201)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    user = UserService(db).create_user(data.username, email=data.email)
    return {"username": user.username, "email": user.email}


@router.delete("/{username}", status_code=204)
def delete_user(username: str, db: Session = Depends(get_db)):
    UserService(db).delete_user(username)
    return Response(status_code=204)


@router.get("/{username}/folders", response_model=List[MusicFolderResponse])
def list_user_folders(
    username: str,
    include_disabled: bool = Query(True),
    db: Session = Depends(get_db),
):
    return MusicFolderService(db).list_folders_for_user(username, include_disabled=include_disabled)


@router.put("/{username}/folders", response_model=List[MusicFolderResponse])
def set_user_folders(username: str, data: UserFoldersUpdate, db: Session = Depends(get_db)):
    """Replace the set of folders visible to *username*."""
    return MusicFolderService(db).set_folders_for_user(username, data.folder_ids)
