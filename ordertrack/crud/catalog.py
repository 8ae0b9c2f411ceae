"""目录数据操作：客户、产品、材料、工序、车间、设备"""

from typing import List, Optional

from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.errors import IntegrityViolation
from .base import commit_or_raise, require


def _create_named(db: Session, model, name: str, label: str):
    if db.query(model).filter(model.name == name).first() is not None:
        raise IntegrityViolation(f"{label} '{name}' already exists")
    obj = model(name=name)
    db.add(obj)
    commit_or_raise(db, f"{label} '{name}' already exists")
    db.refresh(obj)
    return obj


# 客户
def create_customer(db: Session, customer: schemas.CustomerCreate) -> models.Customer:
    db_customer = models.Customer(name=customer.name, phone=customer.phone, email=customer.email)
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


def list_customers(db: Session) -> List[models.Customer]:
    return db.query(models.Customer).order_by(models.Customer.id).all()


def find_or_add_customer(db: Session, name: str, phone: str, email: Optional[str]) -> models.Customer:
    """按电话查找客户，找不到则新建（不提交）"""
    customer = db.query(models.Customer).filter(models.Customer.phone == phone).first()
    if customer is None:
        customer = models.Customer(name=name, phone=phone, email=email)
        db.add(customer)
        db.flush()
    elif email and not customer.email:
        customer.email = email
    return customer


# 产品与材料
def create_product(db: Session, name: str) -> models.Product:
    return _create_named(db, models.Product, name, "Product")


def list_products(db: Session) -> List[models.Product]:
    return db.query(models.Product).order_by(models.Product.name).all()


def create_material(db: Session, name: str) -> models.Material:
    return _create_named(db, models.Material, name, "Material")


def list_materials(db: Session) -> List[models.Material]:
    return db.query(models.Material).order_by(models.Material.name).all()


# 工序
def create_operation(db: Session, operation: schemas.OperationCreate) -> models.Operation:
    """创建工序"""
    if db.query(models.Operation).filter(models.Operation.name == operation.name).first() is not None:
        raise IntegrityViolation(f"Operation '{operation.name}' already exists")
    db_operation = models.Operation(name=operation.name, default_minutes=operation.default_minutes)
    db.add(db_operation)
    commit_or_raise(db, f"Operation '{operation.name}' already exists")
    db.refresh(db_operation)
    return db_operation


def list_operations(db: Session) -> List[models.Operation]:
    return db.query(models.Operation).order_by(models.Operation.name).all()


# 车间与设备
def create_workshop(db: Session, name: str) -> models.Workshop:
    return _create_named(db, models.Workshop, name, "Workshop")


def list_workshops(db: Session) -> List[models.Workshop]:
    return db.query(models.Workshop).order_by(models.Workshop.name).all()


def create_equipment(db: Session, equipment: schemas.EquipmentCreate) -> models.Equipment:
    require(db, models.Workshop, equipment.workshop_id, "Workshop")
    db_equipment = models.Equipment(name=equipment.name, workshop_id=equipment.workshop_id)
    db.add(db_equipment)
    commit_or_raise(db, "Invalid equipment reference")
    db.refresh(db_equipment)
    return db_equipment


def list_equipment(db: Session) -> List[models.Equipment]:
    return db.query(models.Equipment).order_by(models.Equipment.name).all()
