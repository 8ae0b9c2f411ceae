"""分析报表

只读查询，返回可直接序列化为 JSON 的行（dict）。
与时间相关的报表显式接收 now / today，WIP 估值显式接收 rate_per_hour。
"""

import logging
from collections import Counter, OrderedDict
from datetime import date, datetime
from typing import Iterable, List, Optional

from sqlalchemy import case, distinct, func
from sqlalchemy.orm import Session

from ..core import routing
from ..models import (
    Customer,
    Equipment,
    LogStatus,
    Material,
    Operation,
    OperationLog,
    Order,
    OrderItem,
    OrderStat,
    OrderStatus,
    OrderStatusHistory,
    Product,
    RouteStep,
    StepStatus,
    User,
    Workshop,
)
from ..models.enums import TERMINAL_ORDER_STATUSES, WIP_ORDER_STATUSES

logger = logging.getLogger(__name__)


def _count_where(condition):
    """条件计数：组内满足 condition 的行数"""
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def _route_query(db: Session, *columns):
    return (
        db.query(*columns)
        .select_from(Order)
        .join(OrderItem, OrderItem.order_id == Order.id)
        .join(Product, Product.id == OrderItem.product_id)
        .join(RouteStep, RouteStep.order_item_id == OrderItem.id)
        .join(Operation, Operation.id == RouteStep.operation_id)
        .outerjoin(Workshop, Workshop.id == RouteStep.workshop_id)
    )


def orders_with_customer(db: Session) -> List[dict]:
    """订单及客户、优先级、交期"""
    rows = (
        db.query(
            Order.id,
            Customer.name.label("customer"),
            Order.status,
            Order.priority,
            Order.due_date,
            Order.created_at,
            Order.updated_at,
        )
        .join(Customer, Customer.id == Order.customer_id)
        .order_by(Order.id)
        .all()
    )
    return [dict(r._mapping) for r in rows]


def order_composition(db: Session) -> List[dict]:
    """订单构成：产品、材料、数量"""
    rows = (
        db.query(
            Order.id.label("order_id"),
            OrderItem.id.label("item_id"),
            Product.name.label("product"),
            Material.name.label("material"),
            OrderItem.quantity,
            OrderItem.notes,
        )
        .join(OrderItem, OrderItem.order_id == Order.id)
        .join(Product, Product.id == OrderItem.product_id)
        .outerjoin(Material, Material.id == OrderItem.material_id)
        .order_by(Order.id, OrderItem.id)
        .all()
    )
    return [dict(r._mapping) for r in rows]


def route_dump(db: Session) -> List[dict]:
    """所有明细的完整工艺路线"""
    rows = (
        _route_query(
            db,
            Order.id.label("order_id"),
            OrderItem.id.label("item_id"),
            Product.name.label("product"),
            RouteStep.id.label("route_step_id"),
            RouteStep.step_no,
            Operation.name.label("operation"),
            Workshop.name.label("workshop"),
            RouteStep.status.label("step_status"),
            RouteStep.planned_minutes,
            RouteStep.planned_start,
            RouteStep.planned_finish,
        )
        .order_by(Order.id, OrderItem.id, RouteStep.step_no)
        .all()
    )
    return [dict(r._mapping) for r in rows]


def execution_facts(db: Session) -> List[dict]:
    """执行记录：设备、操作员、起止时间；同一步骤内按记录顺序（重试先后）"""
    rows = (
        _route_query(
            db,
            Order.id.label("order_id"),
            Product.name.label("product"),
            RouteStep.step_no,
            Operation.name.label("operation"),
            OperationLog.id.label("log_id"),
            Equipment.name.label("equipment"),
            User.full_name.label("operator"),
            OperationLog.started_at,
            OperationLog.finished_at,
            OperationLog.status,
            OperationLog.result_note,
        )
        .join(OperationLog, OperationLog.route_step_id == RouteStep.id)
        .outerjoin(Equipment, Equipment.id == OperationLog.equipment_id)
        .outerjoin(User, User.id == OperationLog.operator_id)
        .order_by(Order.id, Product.name, RouteStep.step_no, OperationLog.id)
        .all()
    )
    return [dict(r._mapping) for r in rows]


def current_positions(db: Session) -> List[dict]:
    """每个订单明细当前所在的步骤"""
    rows = (
        _route_query(
            db,
            Order.id.label("order_id"),
            OrderItem.id.label("item_id"),
            Product.name.label("product"),
            RouteStep.id.label("route_step_id"),
            RouteStep.step_no,
            Operation.name.label("operation"),
            Workshop.name.label("workshop"),
            RouteStep.status,
        )
        .filter(RouteStep.status.in_([StepStatus.IN_PROGRESS, StepStatus.PLANNED]))
        .all()
    )
    return routing.locate_current_steps(dict(r._mapping) for r in rows)


def status_history(db: Session) -> List[dict]:
    """所有订单的状态变更历史"""
    rows = (
        db.query(
            OrderStatusHistory.order_id,
            OrderStatusHistory.status,
            OrderStatusHistory.changed_at,
            User.full_name.label("changed_by"),
            OrderStatusHistory.comment,
        )
        .outerjoin(User, User.id == OrderStatusHistory.changed_by)
        .order_by(OrderStatusHistory.order_id, OrderStatusHistory.changed_at, OrderStatusHistory.id)
        .all()
    )
    return [dict(r._mapping) for r in rows]


def overdue_orders(db: Session, today: date) -> List[dict]:
    """超过交期且未完成/未取消的订单；逾期天数降序，同天数时优先级高（数值小）的在前"""
    rows = (
        db.query(
            Order.id,
            Customer.name.label("customer"),
            Order.status,
            Order.due_date,
            Order.priority,
        )
        .join(Customer, Customer.id == Order.customer_id)
        .filter(
            Order.due_date.isnot(None),
            Order.due_date < today,
            Order.status.notin_(TERMINAL_ORDER_STATUSES),
        )
        .order_by(Order.due_date.asc(), Order.priority.asc(), Order.id.asc())
        .all()
    )
    result = []
    for r in rows:
        row = dict(r._mapping)
        row["days_overdue"] = (today - r.due_date).days
        result.append(row)
    return result


def overdue_steps(db: Session, now: datetime) -> List[dict]:
    """超过计划完成时间且未完成的步骤；逾期小时数降序"""
    rows = (
        _route_query(
            db,
            Order.id.label("order_id"),
            Product.name.label("product"),
            RouteStep.id.label("route_step_id"),
            RouteStep.step_no,
            Operation.name.label("operation"),
            Workshop.name.label("workshop"),
            RouteStep.status.label("step_status"),
            RouteStep.planned_finish,
        )
        .filter(
            RouteStep.planned_finish.isnot(None),
            RouteStep.planned_finish < now,
            RouteStep.status != StepStatus.DONE,
        )
        .all()
    )
    result = []
    for r in rows:
        row = dict(r._mapping)
        row["checked_at"] = now
        row["hours_overdue"] = routing.hours_overdue(r.planned_finish, now)
        result.append(row)
    result.sort(key=lambda row: (row["planned_finish"], row["order_id"], row["step_no"]))
    return result


def equipment_utilization(db: Session) -> List[dict]:
    """每台设备正在执行的记录数与历史记录总数"""
    active_ops = _count_where(OperationLog.status == LogStatus.IN_PROGRESS).label("active_ops")
    rows = (
        db.query(
            Equipment.id,
            Equipment.name.label("equipment"),
            Workshop.name.label("workshop"),
            active_ops,
            func.count(OperationLog.id).label("total_logs"),
        )
        .outerjoin(Workshop, Workshop.id == Equipment.workshop_id)
        .outerjoin(OperationLog, OperationLog.equipment_id == Equipment.id)
        .group_by(Equipment.id, Equipment.name, Workshop.name)
        .all()
    )
    result = [dict(r._mapping) for r in rows]
    for row in result:
        row["active_ops"] = int(row["active_ops"])
    result.sort(key=lambda row: (-row["active_ops"], row["equipment"], row["id"]))
    return result


def mean_operation_durations(db: Session) -> List[dict]:
    """按工序统计已完成执行的平均时长（分钟）"""
    samples = (
        db.query(Operation.name, OperationLog.started_at, OperationLog.finished_at)
        .select_from(OperationLog)
        .join(RouteStep, RouteStep.id == OperationLog.route_step_id)
        .join(Operation, Operation.id == RouteStep.operation_id)
        .filter(OperationLog.started_at.isnot(None), OperationLog.finished_at.isnot(None))
        .all()
    )
    return routing.mean_durations(tuple(s) for s in samples)


def workshop_summary(db: Session) -> List[dict]:
    """各车间计划中 / 执行中 / 已完成的步骤数；未分配车间的步骤归入 workshop=None"""
    rows = (
        db.query(
            Workshop.name.label("workshop"),
            _count_where(RouteStep.status == StepStatus.PLANNED).label("planned_steps"),
            _count_where(RouteStep.status == StepStatus.IN_PROGRESS).label("in_progress_steps"),
            _count_where(RouteStep.status == StepStatus.DONE).label("done_steps"),
        )
        .select_from(RouteStep)
        .outerjoin(Workshop, Workshop.id == RouteStep.workshop_id)
        .group_by(Workshop.name)
        .all()
    )
    result = [dict(r._mapping) for r in rows]
    for row in result:
        for key in ("planned_steps", "in_progress_steps", "done_steps"):
            row[key] = int(row[key])
    result.sort(key=lambda row: (row["workshop"] is None, row["workshop"] or ""))
    return result


def top_products(db: Session, limit: Optional[int] = None) -> List[dict]:
    """按订购总数量排序的产品"""
    total_qty = func.sum(OrderItem.quantity).label("total_qty")
    query = (
        db.query(
            Product.name.label("product"),
            total_qty,
            func.count(distinct(OrderItem.order_id)).label("orders_cnt"),
        )
        .select_from(OrderItem)
        .join(Product, Product.id == OrderItem.product_id)
        .group_by(Product.name)
        .order_by(total_qty.desc(), Product.name)
    )
    if limit:
        query = query.limit(limit)
    return [
        {"product": r.product, "total_qty": int(r.total_qty), "orders_cnt": r.orders_cnt}
        for r in query.all()
    ]


def order_stats(db: Session) -> List[dict]:
    """读取订单统计汇总表（由外部脚本刷新）"""
    rows = db.query(OrderStat).order_by(OrderStat.day, OrderStat.status).all()
    return [{"day": r.day, "status": r.status, "orders_count": r.orders_count} for r in rows]


def refresh_order_stats(db: Session) -> int:
    """按 (创建日期, 状态) 重建订单统计汇总表，返回写入的行数"""
    counts = Counter(
        (created_at.date(), OrderStatus(status).value)
        for created_at, status in db.query(Order.created_at, Order.status).all()
    )
    db.query(OrderStat).delete(synchronize_session=False)
    for (day, status), count in sorted(counts.items()):
        db.add(OrderStat(day=day, status=status, orders_count=count))
    db.commit()
    logger.info("order stats refreshed: %d rows", len(counts))
    return len(counts)


def _wip_rows(groups: "OrderedDict[object, List[dict]]", key_name: str, prefix: str, rate_per_hour: float):
    """每组一行：剩余分钟、小时、费率、估值（wip_cost）"""
    result = []
    for key, steps in groups.items():
        minutes = routing.remaining_minutes(steps)
        result.append(
            {
                key_name: key,
                f"{prefix}_minutes": minutes,
                f"{prefix}_hours": round(minutes / 60.0, 2),
                "rate_per_hour": rate_per_hour,
                "wip_cost": routing.wip_cost(minutes, rate_per_hour),
            }
        )
    return result


def _wip_steps(db: Session, group_column, order_statuses: Optional[Iterable[OrderStatus]]):
    query = (
        db.query(
            group_column,
            RouteStep.status,
            RouteStep.planned_minutes,
            Operation.default_minutes,
        )
        .select_from(RouteStep)
        .join(OrderItem, OrderItem.id == RouteStep.order_item_id)
        .join(Order, Order.id == OrderItem.order_id)
        .join(Operation, Operation.id == RouteStep.operation_id)
        .outerjoin(Workshop, Workshop.id == RouteStep.workshop_id)
    )
    if order_statuses is not None:
        query = query.filter(Order.status.in_(list(order_statuses)))
    return query.all()


def _group_steps(rows) -> "OrderedDict[object, List[dict]]":
    groups = OrderedDict()
    for key, status, planned_minutes, default_minutes in rows:
        groups.setdefault(key, []).append(
            {"status": status, "planned_minutes": planned_minutes, "default_minutes": default_minutes}
        )
    return groups


def wip_by_order(
    db: Session, rate_per_hour: float, order_statuses: Iterable[OrderStatus] = WIP_ORDER_STATUSES
) -> List[dict]:
    """按订单估算未完工价值：剩余计划工时 / 60 × 小时费率"""
    groups = _group_steps(_wip_steps(db, Order.id, order_statuses))
    result = _wip_rows(groups, "order_id", "remaining", rate_per_hour)
    result.sort(key=lambda row: (-row["wip_cost"], row["order_id"]))
    return result


def wip_by_workshop(
    db: Session, rate_per_hour: float, order_statuses: Optional[Iterable[OrderStatus]] = None
) -> List[dict]:
    """按车间估算未完工价值

    默认统计所有订单中未完成的步骤，order_statuses 可限定订单状态。
    未分配车间的步骤归入 workshop=None，没有剩余工时的车间不输出。
    """
    groups = _group_steps(_wip_steps(db, Workshop.name, order_statuses))
    result = [row for row in _wip_rows(groups, "workshop", "wip", rate_per_hour) if row["wip_minutes"] > 0]
    result.sort(key=lambda row: (-row["wip_cost"], row["workshop"] is None, row["workshop"] or ""))
    return result


def dashboard_stats(db: Session) -> dict:
    """订单总数、各状态数量、用户数、已完成订单的平均完成小时数"""
    counts = dict(
        db.query(Order.status, func.count(Order.id)).group_by(Order.status).all()
    )
    status_counts = {status.value: int(counts.get(status, 0)) for status in OrderStatus}

    durations = [
        (updated_at - created_at).total_seconds()
        for created_at, updated_at in db.query(Order.created_at, Order.updated_at)
        .filter(Order.status == OrderStatus.DONE, Order.updated_at.isnot(None))
        .all()
    ]
    avg_hours = sum(durations) / len(durations) / 3600.0 if durations else None

    return {
        "totalOrders": sum(status_counts.values()),
        "statusCounts": status_counts,
        "totalUsers": db.query(func.count(User.id)).scalar(),
        "avgCompletionHours": avg_hours,
    }
