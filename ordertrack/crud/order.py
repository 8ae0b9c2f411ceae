"""数据库操作（CRUD）- 订单相关

封装订单的读写操作：
- create_order / create_intake_order 创建订单并写入首条 NEW 历史记录
- update_order_status 通过状态账本修改订单状态
- list_orders 支持关键字搜索、状态过滤和白名单排序
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.errors import NotFoundError
from ..core.status import transition_order_status
from ..models import OrderStatus
from .base import commit_or_raise, require
from .catalog import find_or_add_customer

logger = logging.getLogger(__name__)

# 排序字段白名单 -> 列
_SORT_COLUMNS = {
    schemas.OrderSortField.created_at: models.Order.created_at,
    schemas.OrderSortField.customer_name: models.Customer.name,
    schemas.OrderSortField.status: models.Order.status,
    schemas.OrderSortField.priority: models.Order.priority,
    schemas.OrderSortField.due_date: models.Order.due_date,
}


def _new_order(db: Session, now: datetime, actor_id: Optional[int], comment: str, **fields) -> models.Order:
    db_order = models.Order(status=OrderStatus.NEW, created_at=now, updated_at=now, **fields)
    db.add(db_order)
    db.flush()
    db.add(
        models.OrderStatusHistory(
            order_id=db_order.id,
            status=OrderStatus.NEW,
            changed_at=now,
            changed_by=actor_id,
            comment=comment,
        )
    )
    return db_order


def _add_item(db: Session, order_id: int, item: schemas.OrderItemCreate) -> models.OrderItem:
    require(db, models.Product, item.product_id, "Product")
    require(db, models.Material, item.material_id, "Material")
    db_item = models.OrderItem(
        order_id=order_id,
        product_id=item.product_id,
        material_id=item.material_id,
        quantity=item.quantity,
        notes=item.notes,
    )
    db.add(db_item)
    return db_item


def create_intake_order(db: Session, intake: schemas.IntakeRequest, now: datetime) -> models.Order:
    """公开表单：按电话关联客户并创建 NEW 订单"""
    customer = find_or_add_customer(db, intake.name, intake.tel, intake.email)
    db_order = _new_order(
        db,
        now,
        actor_id=None,
        comment="public intake form",
        customer_id=customer.id,
        services=intake.services_text(),
        message=intake.message,
    )
    commit_or_raise(db, "Could not store order")
    db.refresh(db_order)
    logger.info("intake order %s created for customer %s", db_order.id, customer.id)
    return db_order


def create_order(db: Session, order: schemas.OrderCreate, actor_id: int, now: datetime) -> models.Order:
    """管理员/经理创建订单（含明细），一次提交"""
    require(db, models.Customer, order.customer_id, "Customer")
    db_order = _new_order(
        db,
        now,
        actor_id=actor_id,
        comment="created",
        customer_id=order.customer_id,
        priority=order.priority,
        due_date=order.due_date,
        services=order.services,
        message=order.message,
    )
    for item in order.items:
        _add_item(db, db_order.id, item)
    commit_or_raise(db, "Invalid order reference")
    db.refresh(db_order)
    logger.info("order %s created by user %s", db_order.id, actor_id)
    return db_order


def get_order(db: Session, order_id: int) -> Optional[models.Order]:
    return db.get(models.Order, order_id)


def get_order_or_404(db: Session, order_id: int) -> models.Order:
    order = get_order(db, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


def list_orders(
    db: Session,
    q: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    sort: schemas.OrderSortField = schemas.OrderSortField.created_at,
    direction: schemas.SortDirection = schemas.SortDirection.desc,
) -> List[dict]:
    """订单列表（带客户信息）"""
    query = db.query(models.Order, models.Customer).join(
        models.Customer, models.Customer.id == models.Order.customer_id
    )
    if status is not None:
        query = query.filter(models.Order.status == status)
    if q and q.strip():
        like = f"%{q.strip()}%"
        query = query.filter(
            or_(
                models.Customer.name.ilike(like),
                models.Customer.phone.ilike(like),
                models.Customer.email.ilike(like),
                models.Order.services.ilike(like),
                models.Order.message.ilike(like),
            )
        )
    column = _SORT_COLUMNS[sort]
    column = column.asc() if direction == schemas.SortDirection.asc else column.desc()
    query = query.order_by(column, models.Order.id.desc())

    rows = []
    for order, customer in query.all():
        row = schemas.OrderRead.model_validate(order).model_dump()
        row.update(
            customer_name=customer.name,
            customer_phone=customer.phone,
            customer_email=customer.email,
        )
        rows.append(row)
    return rows


def add_order_item(db: Session, order_id: int, item: schemas.OrderItemCreate, now: datetime) -> models.OrderItem:
    order = get_order_or_404(db, order_id)
    db_item = _add_item(db, order.id, item)
    order.updated_at = now
    commit_or_raise(db, "Invalid order item reference")
    db.refresh(db_item)
    return db_item


def update_order_status(
    db: Session,
    order_id: int,
    status: OrderStatus,
    actor_id: int,
    now: datetime,
    comment: Optional[str] = None,
) -> models.Order:
    """修改订单状态：状态字段与历史记录在同一事务中提交"""
    order = get_order_or_404(db, order_id)
    transition_order_status(db, order, status, now, actor_id=actor_id, comment=comment)
    commit_or_raise(db, "Could not update order status")
    db.refresh(order)
    return order


def list_order_history(db: Session, order_id: int) -> List[models.OrderStatusHistory]:
    """订单状态历史，按时间先后排序"""
    get_order_or_404(db, order_id)
    return (
        db.query(models.OrderStatusHistory)
        .filter(models.OrderStatusHistory.order_id == order_id)
        .order_by(models.OrderStatusHistory.changed_at, models.OrderStatusHistory.id)
        .all()
    )


def delete_order(db: Session, order_id: int) -> None:
    """删除订单及其明细、路线、执行记录和历史"""
    order = get_order_or_404(db, order_id)
    db.delete(order)
    db.commit()
    logger.info("order %s deleted", order_id)
