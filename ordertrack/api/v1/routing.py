"""工艺路线API：路线步骤与执行记录"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...auth import get_current_user
from ...core.clock import Clock, get_clock
from ...database.connection import get_db

router = APIRouter(tags=["routing"])


@router.get("/items/{item_id}/steps", response_model=List[schemas.RouteStepRead])
def get_route(item_id: int, db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return crud.get_route(db, item_id)


@router.post("/items/{item_id}/steps", response_model=schemas.RouteStepRead, status_code=201)
def append_step(
    item_id: int,
    step: schemas.RouteStepCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    """在路线末尾追加步骤"""
    return crud.append_route_step(db, item_id, step)


@router.patch("/steps/{step_id}/status", response_model=schemas.RouteStepRead)
def update_step_status(
    step_id: int,
    update: schemas.StepStatusUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    return crud.update_step_status(db, step_id, update.status, actor_id=user.id, now=clock())


@router.post("/steps/{step_id}/logs", response_model=schemas.OperationLogRead, status_code=201)
def start_log(
    step_id: int,
    log: schemas.OperationLogStart,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    return crud.start_operation_log(db, step_id, log, actor_id=user.id, now=clock())


@router.patch("/logs/{log_id}/finish", response_model=schemas.OperationLogRead)
def finish_log(
    log_id: int,
    finish: schemas.OperationLogFinish,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    return crud.finish_operation_log(db, log_id, finish, actor_id=user.id, now=clock())
