"""数据库模型模块

定义所有 SQLAlchemy ORM 模型
"""

from ..database.connection import Base
from .enums import LogStatus, OrderStatus, StepStatus, UserRole
from .customer import Customer
from .product import Material, Product
from .operation import Operation
from .workshop import Equipment, Workshop
from .user import User
from .order import Order, OrderItem
from .route import OperationLog, RouteStep
from .order_status_history import OrderStatusHistory
from .order_stat import OrderStat

__all__ = [
    "Base",
    "OrderStatus",
    "StepStatus",
    "LogStatus",
    "UserRole",
    "Customer",
    "Product",
    "Material",
    "Operation",
    "Workshop",
    "Equipment",
    "User",
    "Order",
    "OrderItem",
    "RouteStep",
    "OperationLog",
    "OrderStatusHistory",
    "OrderStat",
]
