"""公开下单表单（无需登录）"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...core.clock import Clock, get_clock
from ...database.connection import get_db

router = APIRouter(tags=["intake"])


@router.post("/intake", response_model=schemas.IntakeResponse, status_code=201)
def submit_intake(
    intake: schemas.IntakeRequest,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    order = crud.create_intake_order(db, intake, clock())
    return schemas.IntakeResponse(orderId=order.id, createdAt=order.created_at)
