"""订单API

经理和管理员均可访问；状态修改同时写入状态历史。
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...auth import get_current_user
from ...core.clock import Clock, get_clock
from ...database.connection import get_db

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/", response_model=List[schemas.OrderListRow])
def list_orders(
    q: Optional[str] = None,
    status: Optional[models.OrderStatus] = None,
    sort: schemas.OrderSortField = schemas.OrderSortField.created_at,
    direction: schemas.SortDirection = Query(schemas.SortDirection.desc),
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    """订单列表：关键字搜索、状态过滤、白名单排序"""
    return crud.list_orders(db, q=q, status=status, sort=sort, direction=direction)


@router.post("/", response_model=schemas.OrderDetail, status_code=201)
def create_order(
    order: schemas.OrderCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    return crud.create_order(db, order, actor_id=user.id, now=clock())


@router.get("/{order_id}", response_model=schemas.OrderDetail)
def get_order(order_id: int, db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return crud.get_order_or_404(db, order_id)


@router.post("/{order_id}/items", response_model=schemas.OrderItemRead, status_code=201)
def add_item(
    order_id: int,
    item: schemas.OrderItemCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    return crud.add_order_item(db, order_id, item, clock())


@router.patch("/{order_id}/status", response_model=schemas.OrderRead)
def update_status(
    order_id: int,
    update: schemas.StatusUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    """修改订单状态并记录到状态历史"""
    return crud.update_order_status(
        db, order_id, update.status, actor_id=user.id, now=clock(), comment=update.comment
    )


@router.get("/{order_id}/history", response_model=List[schemas.StatusHistoryRead])
def get_history(order_id: int, db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return crud.list_order_history(db, order_id)


@router.delete("/{order_id}")
def delete_order(order_id: int, db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    crud.delete_order(db, order_id)
    return {"success": True}
