"""数据库操作（CRUD）- 工艺路线

- append_route_step 只允许在路线末尾追加步骤（step_no 严格递增）
- update_step_status / start_operation_log / finish_operation_log
  修改步骤后同步订单状态
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.errors import IntegrityViolation, NotFoundError
from ..core.status import sync_order_with_route
from ..models import LogStatus, StepStatus
from .base import commit_or_raise, require

logger = logging.getLogger(__name__)


def get_item_or_404(db: Session, item_id: int) -> models.OrderItem:
    item = db.get(models.OrderItem, item_id)
    if item is None:
        raise NotFoundError("Order item not found")
    return item


def get_step_or_404(db: Session, step_id: int) -> models.RouteStep:
    step = db.get(models.RouteStep, step_id)
    if step is None:
        raise NotFoundError("Route step not found")
    return step


def get_route(db: Session, item_id: int) -> List[models.RouteStep]:
    """明细的工艺路线，按 step_no 排序"""
    get_item_or_404(db, item_id)
    return (
        db.query(models.RouteStep)
        .filter(models.RouteStep.order_item_id == item_id)
        .order_by(models.RouteStep.step_no)
        .all()
    )


def append_route_step(db: Session, item_id: int, step: schemas.RouteStepCreate) -> models.RouteStep:
    """在路线末尾追加步骤"""
    item = get_item_or_404(db, item_id)
    require(db, models.Operation, step.operation_id, "Operation")
    require(db, models.Workshop, step.workshop_id, "Workshop")

    last_no = (
        db.query(func.max(models.RouteStep.step_no))
        .filter(models.RouteStep.order_item_id == item.id)
        .scalar()
    ) or 0
    step_no = step.step_no if step.step_no is not None else last_no + 1
    if step_no <= last_no:
        raise IntegrityViolation(f"step_no must be greater than {last_no}")

    db_step = models.RouteStep(
        order_item_id=item.id,
        step_no=step_no,
        operation_id=step.operation_id,
        workshop_id=step.workshop_id,
        status=StepStatus.PLANNED,
        planned_minutes=step.planned_minutes,
        planned_start=step.planned_start,
        planned_finish=step.planned_finish,
    )
    db.add(db_step)
    commit_or_raise(db, f"step_no {step_no} already exists for item {item.id}")
    db.refresh(db_step)
    logger.info("item %s: appended step %s (operation %s)", item.id, step_no, step.operation_id)
    return db_step


def _sync_order(db: Session, step: models.RouteStep, actor_id: Optional[int], now: datetime) -> None:
    db.flush()
    sync_order_with_route(db, step.item.order, now, actor_id=actor_id)


def update_step_status(
    db: Session, step_id: int, status: StepStatus, actor_id: Optional[int], now: datetime
) -> models.RouteStep:
    """修改步骤状态，并按路线进度推进订单状态

    步骤直接标记为 DONE 时，仍在执行中的记录一并以 DONE 结束。
    """
    step = get_step_or_404(db, step_id)
    step.status = status
    if status == StepStatus.DONE:
        for log in step.logs:
            if log.status == LogStatus.IN_PROGRESS:
                log.status = LogStatus.DONE
                log.finished_at = max(now, log.started_at) if log.started_at else now
    _sync_order(db, step, actor_id, now)
    commit_or_raise(db, "Could not update route step")
    db.refresh(step)
    return step


def start_operation_log(
    db: Session, step_id: int, log: schemas.OperationLogStart, actor_id: Optional[int], now: datetime
) -> models.OperationLog:
    """开始一次执行；已存在记录时视为重试"""
    step = get_step_or_404(db, step_id)
    if step.status == StepStatus.DONE:
        raise IntegrityViolation("Route step is already done")
    require(db, models.Equipment, log.equipment_id, "Equipment")
    require(db, models.User, log.operator_id, "Operator")

    db_log = models.OperationLog(
        route_step_id=step.id,
        equipment_id=log.equipment_id,
        operator_id=log.operator_id,
        started_at=log.started_at or now,
        status=LogStatus.IN_PROGRESS,
    )
    db.add(db_log)
    if step.status == StepStatus.PLANNED:
        step.status = StepStatus.IN_PROGRESS
    _sync_order(db, step, actor_id, now)
    commit_or_raise(db, "Invalid operation log reference")
    db.refresh(db_log)
    return db_log


def finish_operation_log(
    db: Session, log_id: int, finish: schemas.OperationLogFinish, actor_id: Optional[int], now: datetime
) -> models.OperationLog:
    """结束执行：DONE 完成步骤，FAILED 保留步骤以便重试"""
    db_log = db.get(models.OperationLog, log_id)
    if db_log is None:
        raise NotFoundError("Operation log not found")
    if db_log.finished_at is not None:
        raise IntegrityViolation("Operation log is already finished")

    finished_at = finish.finished_at or now
    if db_log.started_at is not None and finished_at < db_log.started_at:
        raise IntegrityViolation("finished_at must not be earlier than started_at")
    db_log.finished_at = finished_at
    db_log.status = finish.status
    db_log.result_note = finish.result_note

    step = db_log.step
    if finish.status == LogStatus.DONE:
        step.status = StepStatus.DONE
    _sync_order(db, step, actor_id, now)
    commit_or_raise(db, "Could not finish operation log")
    db.refresh(db_log)
    return db_log
