"""订单状态账本

订单的 status 字段只能通过 transition_order_status 修改：同一个会话中
更新状态并追加一条历史记录，由调用方统一 commit，两者要么同时写入要么都不写入。
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ..models import Order, OrderStatus, OrderStatusHistory, StepStatus
from ..models.enums import TERMINAL_ORDER_STATUSES

logger = logging.getLogger(__name__)


def transition_order_status(
    db: Session,
    order: Order,
    new_status: OrderStatus,
    now: datetime,
    actor_id: Optional[int] = None,
    comment: Optional[str] = None,
) -> OrderStatusHistory:
    """修改订单状态并追加历史记录（不提交）"""
    old_status = order.status
    order.status = new_status
    order.updated_at = now
    entry = OrderStatusHistory(
        order_id=order.id,
        status=new_status,
        changed_at=now,
        changed_by=actor_id,
        comment=comment,
    )
    db.add(entry)
    logger.info(
        "order %s status %s -> %s (actor=%s)",
        order.id,
        getattr(old_status, "value", old_status),
        new_status.value,
        actor_id,
    )
    return entry


def route_driven_status(current: OrderStatus, step_statuses: Iterable[StepStatus]) -> Optional[OrderStatus]:
    """根据路线步骤推导订单应进入的状态，不需要变更时返回 None

    - 已完成 / 已取消的订单不受路线影响
    - 所有步骤完成 -> DONE
    - 任一步骤已开始且订单尚未开工 -> IN_PROGRESS
    """
    current = OrderStatus(current)
    if current in TERMINAL_ORDER_STATUSES:
        return None
    statuses = [StepStatus(s) for s in step_statuses]
    if not statuses:
        return None
    if all(s == StepStatus.DONE for s in statuses):
        return OrderStatus.DONE
    if current in (OrderStatus.NEW, OrderStatus.PLANNED) and any(s != StepStatus.PLANNED for s in statuses):
        return OrderStatus.IN_PROGRESS
    return None


def sync_order_with_route(db: Session, order: Order, now: datetime, actor_id: Optional[int] = None):
    """路线状态变化后同步订单状态（不提交）"""
    step_statuses = [step.status for item in order.items for step in item.steps]
    target = route_driven_status(order.status, step_statuses)
    if target is None:
        return None
    return transition_order_status(
        db, order, target, now, actor_id=actor_id, comment="route progress"
    )
