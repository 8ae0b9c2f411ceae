"""订单数据结构定义

定义订单相关的Pydantic模型
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..models.enums import OrderStatus


class OrderSortField(str, Enum):
    """订单列表允许的排序字段"""
    created_at = "created_at"
    customer_name = "customer_name"
    status = "status"
    priority = "priority"
    due_date = "due_date"


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class IntakeRequest(BaseModel):
    """公开表单提交（无需登录）"""
    name: str = Field(..., min_length=1)
    tel: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    services: Union[List[str], str, None] = None
    message: Optional[str] = None

    @field_validator("name", "tel")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    def services_text(self) -> Optional[str]:
        if isinstance(self.services, list):
            return ", ".join(self.services)
        return self.services


class IntakeResponse(BaseModel):
    success: bool = True
    orderId: int
    createdAt: datetime


class OrderItemCreate(BaseModel):
    product_id: int
    material_id: Optional[int] = None
    quantity: int = Field(..., gt=0)
    notes: Optional[str] = None


class OrderItemRead(OrderItemCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int


class OrderCreate(BaseModel):
    """创建订单时的模型"""
    customer_id: int
    priority: int = 3
    due_date: Optional[date] = None
    services: Optional[str] = None
    message: Optional[str] = None
    items: List[OrderItemCreate] = []


class OrderRead(BaseModel):
    """读取订单时的模型"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    status: OrderStatus
    priority: int
    due_date: Optional[date] = None
    services: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class OrderDetail(OrderRead):
    items: List[OrderItemRead] = []


class OrderListRow(OrderRead):
    customer_name: str
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None


class StatusUpdate(BaseModel):
    status: OrderStatus
    comment: Optional[str] = None


class StatusHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    status: OrderStatus
    changed_at: datetime
    changed_by: Optional[int] = None
    comment: Optional[str] = None
