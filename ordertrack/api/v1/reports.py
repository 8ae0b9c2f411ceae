"""报表API

订单与路线类报表对经理和管理员开放；WIP估值与汇总统计仅限管理员。
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import models
from ...auth import get_current_user, require_admin
from ...config.settings import settings
from ...core.clock import Clock, get_clock
from ...crud import reports
from ...database.connection import get_db

router = APIRouter(prefix="/reports", tags=["reports"])
stats_router = APIRouter(prefix="/stats", tags=["reports"])


def get_wip_rate() -> float:
    """WIP估值使用的小时费率"""
    return settings.WIP_RATE_PER_HOUR


@router.get("/orders")
def orders_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.orders_with_customer(db)


@router.get("/composition")
def composition_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.order_composition(db)


@router.get("/routes")
def routes_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.route_dump(db)


@router.get("/execution")
def execution_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.execution_facts(db)


@router.get("/current-steps")
def current_steps_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    """订单当前所在的工艺步骤"""
    return reports.current_positions(db)


@router.get("/history")
def history_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.status_history(db)


@router.get("/overdue-orders")
def overdue_orders_report(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    return reports.overdue_orders(db, clock().date())


@router.get("/overdue-steps")
def overdue_steps_report(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    user: models.User = Depends(get_current_user),
):
    return reports.overdue_steps(db, clock())


@router.get("/equipment-utilization")
def equipment_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.equipment_utilization(db)


@router.get("/operation-durations")
def durations_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.mean_operation_durations(db)


@router.get("/workshops")
def workshops_report(db: Session = Depends(get_db), user: models.User = Depends(get_current_user)):
    return reports.workshop_summary(db)


@router.get("/top-products")
def top_products_report(
    limit: Optional[int] = None,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return reports.top_products(db, limit=limit)


@router.get("/wip/orders")
def wip_orders_report(
    db: Session = Depends(get_db),
    rate: float = Depends(get_wip_rate),
    admin: models.User = Depends(require_admin),
):
    """按订单的未完工估值（仅管理员）"""
    return reports.wip_by_order(db, rate)


@router.get("/wip/workshops")
def wip_workshops_report(
    db: Session = Depends(get_db),
    rate: float = Depends(get_wip_rate),
    admin: models.User = Depends(require_admin),
):
    return reports.wip_by_workshop(db, rate)


@stats_router.get("")
def dashboard_stats(db: Session = Depends(get_db), admin: models.User = Depends(require_admin)):
    return reports.dashboard_stats(db)


@stats_router.get("/mv")
def order_stats(db: Session = Depends(get_db), admin: models.User = Depends(require_admin)):
    """订单统计汇总表（由 scripts/refresh_order_stats.py 刷新）"""
    return reports.order_stats(db)
