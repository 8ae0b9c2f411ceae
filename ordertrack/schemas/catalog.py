"""目录数据结构：客户、产品、材料、工序、车间、设备"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class NamedCreate(BaseModel):
    """只有名称的目录项（产品、材料、车间）"""
    name: str = Field(..., min_length=1)


class NamedRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class OperationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    default_minutes: Optional[int] = Field(None, ge=0)


class OperationRead(OperationCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


class EquipmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    workshop_id: Optional[int] = None


class EquipmentRead(EquipmentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
