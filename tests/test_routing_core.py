from datetime import datetime, timedelta

from ordertrack.core import routing
from ordertrack.core.status import route_driven_status
from ordertrack.models import OrderStatus, StepStatus


def step(order_id, item_id, step_no, status):
    return {"order_id": order_id, "item_id": item_id, "step_no": step_no, "status": status}


def test_current_step_is_the_active_one():
    rows = [step(1, 1, 1, "DONE"), step(1, 1, 2, "IN_PROGRESS"), step(1, 1, 3, "PLANNED")]
    current = routing.locate_current_steps(rows)
    assert [(r["item_id"], r["step_no"]) for r in current] == [(1, 2)]


def test_fully_done_item_has_no_current_step():
    rows = [step(1, 2, 1, "DONE"), step(1, 2, 2, "DONE")]
    assert routing.locate_current_steps(rows) == []


def test_in_progress_outranks_planned_regardless_of_step_no():
    rows = [step(1, 1, 1, "PLANNED"), step(1, 1, 4, "IN_PROGRESS"), step(1, 1, 2, "PLANNED")]
    current = routing.locate_current_steps(rows)
    assert len(current) == 1
    assert current[0]["step_no"] == 4


def test_lowest_planned_step_when_nothing_started():
    rows = [step(1, 1, 3, "PLANNED"), step(1, 1, 2, "PLANNED")]
    assert routing.locate_current_steps(rows)[0]["step_no"] == 2


def test_one_row_per_item_ordered_by_order_then_item():
    rows = [
        step(2, 5, 1, "PLANNED"),
        step(1, 3, 1, "DONE"),
        step(1, 3, 2, "PLANNED"),
        step(1, 1, 1, "IN_PROGRESS"),
        step(1, 1, 2, "IN_PROGRESS"),
        step(2, 4, 7, "IN_PROGRESS"),
    ]
    current = routing.locate_current_steps(rows)
    assert [(r["order_id"], r["item_id"], r["step_no"]) for r in current] == [
        (1, 1, 1),
        (1, 3, 2),
        (2, 4, 7),
        (2, 5, 1),
    ]
    assert all(r["status"] != "DONE" for r in current)


def test_planned_minutes_fallback_chain():
    assert routing.step_planned_minutes(45, 30) == 45
    assert routing.step_planned_minutes(None, 30) == 30
    assert routing.step_planned_minutes(None, None) == 0
    assert routing.step_planned_minutes(0, 30) == 0


def test_remaining_minutes_skips_done_steps():
    steps = [
        {"status": StepStatus.DONE, "planned_minutes": 600, "default_minutes": None},
        {"status": StepStatus.IN_PROGRESS, "planned_minutes": None, "default_minutes": 30},
        {"status": StepStatus.PLANNED, "planned_minutes": 90, "default_minutes": 30},
        {"status": StepStatus.PLANNED, "planned_minutes": None, "default_minutes": None},
    ]
    assert routing.remaining_minutes(steps) == 120


def test_remaining_minutes_is_zero_when_everything_is_done():
    steps = [{"status": "DONE", "planned_minutes": 50, "default_minutes": 10}]
    assert routing.remaining_minutes(steps) == 0
    assert routing.wip_cost(0, 1500) == 0


def test_wip_cost_uses_the_given_rate():
    assert routing.wip_cost(120, 1500) == 3000
    assert routing.wip_cost(90, 1000) == 1500
    assert routing.wip_cost(1, 1500) == 25


def test_hours_overdue_grows_with_time():
    planned_finish = datetime(2026, 3, 9, 12, 0)
    now = datetime(2026, 3, 10, 12, 0)
    first = routing.hours_overdue(planned_finish, now)
    later = routing.hours_overdue(planned_finish, now + timedelta(minutes=30))
    assert first == 24.0
    assert later == 24.5
    assert later >= first
    assert routing.hours_overdue(planned_finish, planned_finish + timedelta(minutes=5)) == 0.1


def test_mean_durations_ignore_open_logs_and_skip_unused_operations():
    t = datetime(2026, 3, 1, 8, 0)
    samples = [
        ("Cut", t, t + timedelta(minutes=30)),
        ("Cut", t, t + timedelta(minutes=50)),
        ("Cut", t, None),
        ("Weld", None, t),
        ("Paint", t, t + timedelta(minutes=90)),
    ]
    result = routing.mean_durations(samples)
    assert result == [
        {"operation": "Paint", "avg_minutes": 90.0, "done_count": 1},
        {"operation": "Cut", "avg_minutes": 40.0, "done_count": 2},
    ]


def test_mean_duration_matches_incremental_mean():
    t = datetime(2026, 3, 1, 8, 0)
    samples = [("Cut", t, t + timedelta(minutes=m)) for m in (10, 20, 45)]
    before = routing.mean_durations(samples)[0]
    samples.append(("Cut", t, t + timedelta(minutes=65)))
    after = routing.mean_durations(samples)[0]
    n = before["done_count"]
    expected = before["avg_minutes"] + (65 - before["avg_minutes"]) / (n + 1)
    assert after["done_count"] == n + 1
    assert abs(after["avg_minutes"] - expected) < 1e-9


def test_route_driven_status():
    assert route_driven_status(OrderStatus.PLANNED, ["IN_PROGRESS", "PLANNED"]) == OrderStatus.IN_PROGRESS
    assert route_driven_status(OrderStatus.NEW, ["DONE", "PLANNED"]) == OrderStatus.IN_PROGRESS
    assert route_driven_status(OrderStatus.IN_PROGRESS, ["DONE", "DONE"]) == OrderStatus.DONE
    assert route_driven_status(OrderStatus.IN_PROGRESS, ["DONE", "PLANNED"]) is None
    assert route_driven_status(OrderStatus.NEW, ["PLANNED"]) is None
    assert route_driven_status(OrderStatus.CANCELED, ["DONE"]) is None
    assert route_driven_status(OrderStatus.NEW, []) is None
