from datetime import date, datetime, timedelta

from ordertrack import crud, models, schemas
from ordertrack.api.v1.reports import get_wip_rate
from ordertrack.crud import reports
from ordertrack.main import app
from tests.conftest import FIXED_NOW


def _set_status(db, step, status):
    return crud.update_step_status(db, step.id, status, actor_id=None, now=FIXED_NOW)


def _log(db, step, equipment=None, started_at=None, finished_at=None, status=models.LogStatus.DONE):
    log = crud.start_operation_log(
        db,
        step.id,
        schemas.OperationLogStart(equipment_id=equipment.id if equipment else None, started_at=started_at),
        actor_id=None,
        now=FIXED_NOW,
    )
    if finished_at is not None:
        log = crud.finish_operation_log(
            db, log.id, schemas.OperationLogFinish(status=status, finished_at=finished_at), actor_id=None, now=FIXED_NOW
        )
    return log


def test_reports_require_login(client):
    assert client.get("/api/v1/reports/orders").status_code == 401


def test_orders_and_composition(client, manager_headers, make_order, catalog):
    first = make_order(products=("bracket", "flange"), due_date=date(2026, 4, 1))
    second = make_order(priority=1)

    rows = client.get("/api/v1/reports/orders", headers=manager_headers).json()
    assert [r["id"] for r in rows] == [first.id, second.id]
    assert rows[0]["customer"] == "Acme"
    assert rows[0]["due_date"] == "2026-04-01"
    assert rows[1]["priority"] == 1

    rows = client.get("/api/v1/reports/composition", headers=manager_headers).json()
    assert [(r["order_id"], r["product"]) for r in rows] == [
        (first.id, "Bracket"),
        (first.id, "Flange"),
        (second.id, "Bracket"),
    ]
    assert rows[0]["material"] is None
    assert rows[0]["quantity"] == 10


def test_route_dump_and_execution_facts(client, manager_headers, make_order, catalog, add_step, db):
    order = make_order()
    item = order.items[0]
    weld = add_step(item, "weld", workshop="assembly")
    add_step(item, "cut", workshop="machining", planned_minutes=20)
    _log(db, weld, catalog["welder"], FIXED_NOW - timedelta(hours=2), FIXED_NOW - timedelta(hours=1), models.LogStatus.FAILED)
    _log(db, weld, catalog["welder"], FIXED_NOW - timedelta(minutes=50), FIXED_NOW)

    rows = client.get("/api/v1/reports/routes", headers=manager_headers).json()
    assert [(r["step_no"], r["operation"], r["workshop"]) for r in rows] == [
        (1, "Weld", "Assembly"),
        (2, "Cut", "Machining"),
    ]
    assert rows[1]["planned_minutes"] == 20
    assert rows[0]["step_status"] == "DONE"

    rows = client.get("/api/v1/reports/execution", headers=manager_headers).json()
    assert [(r["step_no"], r["status"]) for r in rows] == [(1, "FAILED"), (1, "DONE")]
    assert rows[0]["equipment"] == "Welder"
    assert rows[0]["operator"] is None


def test_current_steps_prefer_in_progress(client, manager_headers, make_order, add_step, db):
    order = make_order(products=("bracket", "flange"))
    bracket, flange = order.items
    first = add_step(bracket, "cut")
    add_step(bracket, "weld")
    third = add_step(bracket, "paint")
    add_step(flange, "cut")
    add_step(flange, "weld")
    _set_status(db, first, models.StepStatus.DONE)
    _set_status(db, third, models.StepStatus.IN_PROGRESS)

    rows = client.get("/api/v1/reports/current-steps", headers=manager_headers).json()
    assert [(r["item_id"], r["step_no"], r["status"]) for r in rows] == [
        (bracket.id, 3, "IN_PROGRESS"),
        (flange.id, 1, "PLANNED"),
    ]


def test_current_steps_skip_finished_items(make_order, add_step, db):
    order = make_order()
    add_step(order.items[0], "cut", status=models.StepStatus.DONE)
    assert reports.current_positions(db) == []


def test_status_history_report(client, manager_user, manager_headers, make_order):
    order = make_order()
    client.patch(f"/api/v1/orders/{order.id}/status", json={"status": "PLANNED"}, headers=manager_headers)

    rows = client.get("/api/v1/reports/history", headers=manager_headers).json()
    assert [(r["status"], r["changed_by"]) for r in rows] == [("NEW", None), ("PLANNED", manager_user.full_name)]


def test_overdue_orders(client, manager_headers, make_order):
    late = make_order(due_date=date(2026, 3, 5), priority=3)
    later_tie = make_order(due_date=date(2026, 3, 5), priority=1)
    slightly_late = make_order(due_date=date(2026, 3, 9))
    make_order(due_date=date(2026, 3, 10))
    make_order(due_date=date(2026, 3, 1), status=models.OrderStatus.DONE)
    make_order(due_date=date(2026, 3, 1), status=models.OrderStatus.CANCELED)
    make_order()

    rows = client.get("/api/v1/reports/overdue-orders", headers=manager_headers).json()
    assert [(r["id"], r["days_overdue"]) for r in rows] == [
        (later_tie.id, 5),
        (late.id, 5),
        (slightly_late.id, 1),
    ]


def test_overdue_steps(client, manager_headers, make_order, add_step, db):
    item = make_order().items[0]
    day_late = add_step(item, "cut", workshop="machining", planned_finish=FIXED_NOW - timedelta(hours=24))
    weld = add_step(item, "weld", planned_finish=FIXED_NOW - timedelta(minutes=90))
    add_step(item, "paint", planned_finish=FIXED_NOW + timedelta(hours=1))
    finished = add_step(item, "paint", planned_finish=FIXED_NOW - timedelta(hours=48))
    _set_status(db, finished, models.StepStatus.DONE)

    rows = client.get("/api/v1/reports/overdue-steps", headers=manager_headers).json()
    assert [(r["route_step_id"], r["hours_overdue"]) for r in rows] == [(day_late.id, 24.0), (weld.id, 1.5)]
    assert rows[0]["workshop"] == "Machining"
    assert rows[0]["checked_at"] == FIXED_NOW.isoformat()


def test_equipment_utilization(client, manager_headers, make_order, catalog, add_step, db):
    item = make_order().items[0]
    cut = add_step(item, "cut")
    weld = add_step(item, "weld")
    _log(db, cut, catalog["laser"], FIXED_NOW - timedelta(hours=1), FIXED_NOW, models.LogStatus.FAILED)
    _log(db, cut, catalog["laser"])
    _log(db, weld, catalog["laser"])

    rows = client.get("/api/v1/reports/equipment-utilization", headers=manager_headers).json()
    assert [(r["equipment"], r["workshop"], r["active_ops"], r["total_logs"]) for r in rows] == [
        ("Laser", "Machining", 2, 3),
        ("Welder", "Assembly", 0, 0),
    ]


def test_mean_operation_durations(client, manager_headers, make_order, add_step, db):
    item = make_order().items[0]
    cut = add_step(item, "cut")
    weld = add_step(item, "weld")
    paint = add_step(item, "paint")
    _log(db, cut, started_at=FIXED_NOW - timedelta(minutes=30), finished_at=FIXED_NOW, status=models.LogStatus.FAILED)
    _log(db, cut, started_at=FIXED_NOW - timedelta(minutes=50), finished_at=FIXED_NOW)
    _log(db, weld, started_at=FIXED_NOW - timedelta(minutes=90), finished_at=FIXED_NOW)
    _log(db, paint, started_at=FIXED_NOW - timedelta(minutes=10))

    rows = client.get("/api/v1/reports/operation-durations", headers=manager_headers).json()
    assert [(r["operation"], r["avg_minutes"], r["done_count"]) for r in rows] == [
        ("Weld", 90.0, 1),
        ("Cut", 40.0, 2),
    ]


def test_workshop_summary(client, manager_headers, make_order, add_step, db):
    item = make_order().items[0]
    a = add_step(item, "cut", workshop="machining")
    add_step(item, "cut", workshop="machining")
    b = add_step(item, "weld", workshop="assembly")
    add_step(item, "paint")
    _set_status(db, a, models.StepStatus.DONE)
    _set_status(db, b, models.StepStatus.IN_PROGRESS)

    rows = client.get("/api/v1/reports/workshops", headers=manager_headers).json()
    assert rows == [
        {"workshop": "Assembly", "planned_steps": 0, "in_progress_steps": 1, "done_steps": 0},
        {"workshop": "Machining", "planned_steps": 1, "in_progress_steps": 0, "done_steps": 1},
        {"workshop": None, "planned_steps": 1, "in_progress_steps": 0, "done_steps": 0},
    ]


def test_top_products(client, manager_headers, make_order):
    make_order(products=("bracket", "flange"))
    make_order(products=("bracket", "bracket"))

    rows = client.get("/api/v1/reports/top-products", headers=manager_headers).json()
    assert rows == [
        {"product": "Bracket", "total_qty": 30, "orders_cnt": 2},
        {"product": "Flange", "total_qty": 10, "orders_cnt": 1},
    ]
    rows = client.get("/api/v1/reports/top-products", params={"limit": 1}, headers=manager_headers).json()
    assert len(rows) == 1


def _wip_fixture(make_order, add_step, db):
    """One planned order with mixed steps, plus a NEW order that only the workshop load counts."""
    order = make_order(status=models.OrderStatus.PLANNED)
    item = order.items[0]
    add_step(item, "cut", workshop="machining")
    weld = add_step(item, "weld", workshop="assembly", planned_minutes=90)
    add_step(item, "paint")
    done = add_step(item, "cut", workshop="machining", planned_minutes=500)
    _set_status(db, weld, models.StepStatus.IN_PROGRESS)
    _set_status(db, done, models.StepStatus.DONE)

    fresh = make_order()
    add_step(fresh.items[0], "weld", workshop="assembly")
    return order


def test_wip_by_order(client, admin_headers, make_order, add_step, db):
    order = _wip_fixture(make_order, add_step, db)

    rows = client.get("/api/v1/reports/wip/orders", headers=admin_headers).json()
    assert rows == [
        {
            "order_id": order.id,
            "remaining_minutes": 120,
            "remaining_hours": 2.0,
            "rate_per_hour": 1500.0,
            "wip_cost": 3000.0,
        }
    ]


def test_wip_by_workshop_with_rate_override(client, admin_headers, make_order, add_step, db):
    _wip_fixture(make_order, add_step, db)
    app.dependency_overrides[get_wip_rate] = lambda: 100.0

    rows = client.get("/api/v1/reports/wip/workshops", headers=admin_headers).json()
    assert [(r["workshop"], r["wip_minutes"], r["wip_cost"]) for r in rows] == [
        ("Assembly", 150, 250.0),
        ("Machining", 30, 50.0),
    ]
    assert all(r["rate_per_hour"] == 100.0 for r in rows)


def test_wip_by_workshop_counts_orders_in_any_status(make_order, add_step, db):
    order = make_order()
    add_step(order.items[0], "cut", workshop="machining")

    assert reports.wip_by_workshop(db, 1500) == [
        {"workshop": "Machining", "wip_minutes": 30, "wip_hours": 0.5, "rate_per_hour": 1500, "wip_cost": 750.0}
    ]
    assert reports.wip_by_order(db, 1500) == []
    assert reports.wip_by_workshop(db, 1500, order_statuses=[models.OrderStatus.PLANNED]) == []


def test_admin_only_reports(client, manager_headers):
    for path in ("/reports/wip/orders", "/reports/wip/workshops", "/stats", "/stats/mv"):
        assert client.get(f"/api/v1{path}", headers=manager_headers).status_code == 403


def test_dashboard_stats(client, admin_headers, make_order, db):
    make_order()
    make_order(status=models.OrderStatus.PLANNED)
    done = make_order(now=FIXED_NOW - timedelta(hours=10))
    crud.update_order_status(db, done.id, models.OrderStatus.DONE, actor_id=None, now=FIXED_NOW)

    stats = client.get("/api/v1/stats", headers=admin_headers).json()
    assert stats["totalOrders"] == 3
    assert stats["statusCounts"] == {"NEW": 1, "PLANNED": 1, "IN_PROGRESS": 0, "DONE": 1, "CANCELED": 0}
    assert stats["totalUsers"] == 1
    assert stats["avgCompletionHours"] == 10.0


def test_dashboard_stats_without_finished_orders(db):
    stats = reports.dashboard_stats(db)
    assert stats["totalOrders"] == 0
    assert stats["avgCompletionHours"] is None


def test_order_stats_summary_is_refreshed_explicitly(client, admin_headers, make_order, db):
    make_order()
    make_order()
    make_order(now=datetime(2026, 3, 9, 8, 0), status=models.OrderStatus.CANCELED)

    assert client.get("/api/v1/stats/mv", headers=admin_headers).json() == []

    assert reports.refresh_order_stats(db) == 2
    rows = client.get("/api/v1/stats/mv", headers=admin_headers).json()
    assert rows == [
        {"day": "2026-03-09", "status": "CANCELED", "orders_count": 1},
        {"day": "2026-03-10", "status": "NEW", "orders_count": 2},
    ]
