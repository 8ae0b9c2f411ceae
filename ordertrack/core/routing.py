"""工艺路线计算

纯函数，不访问数据库：
- locate_current_steps 确定每个订单明细当前所在的步骤
- step_planned_minutes / remaining_minutes 计算剩余计划工时
- wip_cost / hours_overdue 用于未完工估值与逾期报表
- mean_durations 汇总工序平均耗时
"""

from collections import OrderedDict
from datetime import datetime
from typing import Iterable, List, Optional

from ..models.enums import StepStatus

# 排序权重：执行中的步骤总是优先于计划中的步骤
_STATUS_RANK = {StepStatus.IN_PROGRESS: 0, StepStatus.PLANNED: 1}


def status_rank(status) -> Optional[int]:
    """返回步骤状态的优先级，已完成的步骤返回 None"""
    return _STATUS_RANK.get(StepStatus(status))


def locate_current_steps(rows: Iterable[dict]) -> List[dict]:
    """为每个 (订单, 明细) 选出当前步骤

    rows 中每一项至少包含 order_id、item_id、step_no、status。
    优先选 step_no 最小的 IN_PROGRESS 步骤，其次是 step_no 最小的 PLANNED 步骤；
    全部完成或没有路线的明细不出现在结果中。
    结果按 (order_id, item_id, 优先级, step_no) 排序。
    """
    best = OrderedDict()
    for row in rows:
        rank = status_rank(row["status"])
        if rank is None:
            continue
        key = (row["order_id"], row["item_id"])
        current = best.get(key)
        if current is None or (rank, row["step_no"]) < (current[0], current[1]["step_no"]):
            best[key] = (rank, row)

    ordered = sorted(
        best.items(),
        key=lambda kv: (kv[0][0], kv[0][1], kv[1][0], kv[1][1]["step_no"]),
    )
    return [row for _, (_, row) in ordered]


def step_planned_minutes(planned_minutes: Optional[int], default_minutes: Optional[int]) -> int:
    """步骤计划工时：步骤自身的值，否则工序默认值，否则 0"""
    if planned_minutes is not None:
        return planned_minutes
    if default_minutes is not None:
        return default_minutes
    return 0


def remaining_minutes(steps: Iterable[dict]) -> int:
    """未完成步骤的计划工时之和

    steps 中每一项包含 status、planned_minutes、default_minutes。
    """
    total = 0
    for step in steps:
        if StepStatus(step["status"]) == StepStatus.DONE:
            continue
        total += step_planned_minutes(step.get("planned_minutes"), step.get("default_minutes"))
    return total


def wip_cost(minutes: float, rate_per_hour: float) -> float:
    """按小时费率估算剩余工时的价值，取整到个位"""
    return float(round(minutes / 60.0 * rate_per_hour))


def hours_overdue(planned_finish: datetime, now: datetime) -> float:
    """超出计划完成时间的小时数，保留一位小数"""
    return round((now - planned_finish).total_seconds() / 3600.0, 1)


def mean_durations(samples: Iterable[tuple]) -> List[dict]:
    """按工序计算平均执行时长（分钟）

    samples 为 (operation, started_at, finished_at)；缺少任一时间戳的记录被忽略，
    从未执行过的工序不会出现在结果中。结果按平均时长降序。
    """
    totals = {}
    for operation, started_at, finished_at in samples:
        if started_at is None or finished_at is None:
            continue
        minutes = (finished_at - started_at).total_seconds() / 60.0
        acc = totals.setdefault(operation, [0.0, 0])
        acc[0] += minutes
        acc[1] += 1

    result = [
        {"operation": op, "avg_minutes": total / count, "done_count": count}
        for op, (total, count) in totals.items()
    ]
    result.sort(key=lambda r: (-r["avg_minutes"], r["operation"]))
    return result
