"""用户管理API（仅管理员）"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...auth import require_admin
from ...database.connection import get_db

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[schemas.UserRead])
def list_users(db: Session = Depends(get_db), admin: models.User = Depends(require_admin)):
    return crud.list_users(db)


@router.post("/", response_model=schemas.UserRead, status_code=201)
def create_user(
    user: schemas.UserCreate,
    db: Session = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    return crud.create_user(db, user)


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), admin: models.User = Depends(require_admin)):
    """删除用户；不能删除自己"""
    crud.delete_user(db, user_id, admin)
    return {"success": True}
