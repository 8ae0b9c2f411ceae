"""API数据模型模块

定义所有 Pydantic 模型（请求/响应结构体）
"""

from .catalog import (
    CustomerCreate,
    CustomerRead,
    EquipmentCreate,
    EquipmentRead,
    NamedCreate,
    NamedRead,
    OperationCreate,
    OperationRead,
)
from .order import (
    IntakeRequest,
    IntakeResponse,
    OrderCreate,
    OrderDetail,
    OrderItemCreate,
    OrderItemRead,
    OrderListRow,
    OrderRead,
    OrderSortField,
    SortDirection,
    StatusHistoryRead,
    StatusUpdate,
)
from .routing import (
    OperationLogFinish,
    OperationLogRead,
    OperationLogStart,
    RouteStepCreate,
    RouteStepRead,
    StepStatusUpdate,
)
from .user import Token, UserCreate, UserLogin, UserRead

__all__ = [
    "CustomerCreate",
    "CustomerRead",
    "EquipmentCreate",
    "EquipmentRead",
    "NamedCreate",
    "NamedRead",
    "OperationCreate",
    "OperationRead",
    "IntakeRequest",
    "IntakeResponse",
    "OrderCreate",
    "OrderDetail",
    "OrderItemCreate",
    "OrderItemRead",
    "OrderListRow",
    "OrderRead",
    "OrderSortField",
    "SortDirection",
    "StatusHistoryRead",
    "StatusUpdate",
    "OperationLogFinish",
    "OperationLogRead",
    "OperationLogStart",
    "RouteStepCreate",
    "RouteStepRead",
    "StepStatusUpdate",
    "Token",
    "UserCreate",
    "UserLogin",
    "UserRead",
]
