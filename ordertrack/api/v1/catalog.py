"""目录API：客户、产品、材料、工序、车间、设备"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, models, schemas
from ...auth import get_current_user
from ...database.connection import get_db

router = APIRouter(tags=["catalog"], dependencies=[Depends(get_current_user)])


@router.post("/customers/", response_model=schemas.CustomerRead, status_code=201)
def create_customer(customer: schemas.CustomerCreate, db: Session = Depends(get_db)):
    return crud.create_customer(db, customer)


@router.get("/customers/", response_model=List[schemas.CustomerRead])
def list_customers(db: Session = Depends(get_db)):
    return crud.list_customers(db)


@router.post("/products/", response_model=schemas.NamedRead, status_code=201)
def create_product(product: schemas.NamedCreate, db: Session = Depends(get_db)):
    return crud.create_product(db, product.name)


@router.get("/products/", response_model=List[schemas.NamedRead])
def list_products(db: Session = Depends(get_db)):
    return crud.list_products(db)


@router.post("/materials/", response_model=schemas.NamedRead, status_code=201)
def create_material(material: schemas.NamedCreate, db: Session = Depends(get_db)):
    return crud.create_material(db, material.name)


@router.get("/materials/", response_model=List[schemas.NamedRead])
def list_materials(db: Session = Depends(get_db)):
    return crud.list_materials(db)


@router.post("/operations/", response_model=schemas.OperationRead, status_code=201)
def create_operation(operation: schemas.OperationCreate, db: Session = Depends(get_db)):
    return crud.create_operation(db, operation)


@router.get("/operations/", response_model=List[schemas.OperationRead])
def list_operations(db: Session = Depends(get_db)):
    return crud.list_operations(db)


@router.post("/workshops/", response_model=schemas.NamedRead, status_code=201)
def create_workshop(workshop: schemas.NamedCreate, db: Session = Depends(get_db)):
    return crud.create_workshop(db, workshop.name)


@router.get("/workshops/", response_model=List[schemas.NamedRead])
def list_workshops(db: Session = Depends(get_db)):
    return crud.list_workshops(db)


@router.post("/equipment/", response_model=schemas.EquipmentRead, status_code=201)
def create_equipment(equipment: schemas.EquipmentCreate, db: Session = Depends(get_db)):
    return crud.create_equipment(db, equipment)


@router.get("/equipment/", response_model=List[schemas.EquipmentRead])
def list_equipment(db: Session = Depends(get_db)):
    return crud.list_equipment(db)
