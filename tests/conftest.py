import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure project root is on sys.path so tests can import the 'ordertrack' package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Tests always run against a local sqlite file, never the configured MySQL server
os.environ["DATABASE_URL"] = f"sqlite:///{ROOT / 'test.db'}"

from fastapi.testclient import TestClient

from ordertrack import crud, models, schemas
from ordertrack.auth import token_for_user
from ordertrack.core.clock import get_clock
from ordertrack.db import Base, SessionLocal, engine
from ordertrack.main import app

FIXED_NOW = datetime(2026, 3, 10, 12, 0, 0)


@pytest.fixture(autouse=True)
def reset_db():
    # Drop all and re-create so the test DB matches the current models exactly
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db):
    return crud.create_user(
        db,
        schemas.UserCreate(username="admin", password="admin-pw", full_name="Admin", role=models.UserRole.ADMIN),
    )


@pytest.fixture
def manager_user(db):
    return crud.create_user(
        db,
        schemas.UserCreate(username="manager", password="manager-pw", full_name="Manager"),
    )


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {token_for_user(admin_user)}"}


@pytest.fixture
def manager_headers(manager_user):
    return {"Authorization": f"Bearer {token_for_user(manager_user)}"}


@pytest.fixture
def catalog(db):
    """A small shop: one customer, products, operations with and without defaults, workshops, equipment."""
    customer = crud.create_customer(db, schemas.CustomerCreate(name="Acme", phone="+100", email="acme@example.com"))
    bracket = crud.create_product(db, "Bracket")
    flange = crud.create_product(db, "Flange")
    steel = crud.create_material(db, "Steel")
    cut = crud.create_operation(db, schemas.OperationCreate(name="Cut", default_minutes=30))
    weld = crud.create_operation(db, schemas.OperationCreate(name="Weld", default_minutes=60))
    paint = crud.create_operation(db, schemas.OperationCreate(name="Paint"))
    machining = crud.create_workshop(db, "Machining")
    assembly = crud.create_workshop(db, "Assembly")
    laser = crud.create_equipment(db, schemas.EquipmentCreate(name="Laser", workshop_id=machining.id))
    welder = crud.create_equipment(db, schemas.EquipmentCreate(name="Welder", workshop_id=assembly.id))
    return {
        "customer": customer,
        "bracket": bracket,
        "flange": flange,
        "steel": steel,
        "cut": cut,
        "weld": weld,
        "paint": paint,
        "machining": machining,
        "assembly": assembly,
        "laser": laser,
        "welder": welder,
    }


@pytest.fixture
def make_order(db, catalog):
    """Create an order with the given items through the CRUD layer."""

    def _make(products=("bracket",), status=None, due_date=None, priority=3, now=FIXED_NOW):
        order = crud.create_order(
            db,
            schemas.OrderCreate(
                customer_id=catalog["customer"].id,
                priority=priority,
                due_date=due_date,
                items=[
                    schemas.OrderItemCreate(product_id=catalog[p].id, quantity=10) for p in products
                ],
            ),
            actor_id=None,
            now=now,
        )
        if status is not None and status != models.OrderStatus.NEW:
            crud.update_order_status(db, order.id, status, actor_id=None, now=now)
        return order

    return _make


@pytest.fixture
def add_step(db, catalog):
    """Append a route step to an item and optionally move it to a status."""

    def _add(item, operation, status=models.StepStatus.PLANNED, workshop=None, **fields):
        step = crud.append_route_step(
            db,
            item.id,
            schemas.RouteStepCreate(
                operation_id=catalog[operation].id,
                workshop_id=catalog[workshop].id if workshop else None,
                **fields,
            ),
        )
        if status != models.StepStatus.PLANNED:
            step = crud.update_step_status(db, step.id, status, actor_id=None, now=FIXED_NOW)
        return step

    return _add
