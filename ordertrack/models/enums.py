"""状态与角色枚举"""

import enum


class OrderStatus(str, enum.Enum):
    NEW = "NEW"
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELED = "CANCELED"


class StepStatus(str, enum.Enum):
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class LogStatus(str, enum.Enum):
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    FAILED = "FAILED"


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"


# 已结束的订单状态（不计入逾期和WIP）
TERMINAL_ORDER_STATUSES = (OrderStatus.DONE, OrderStatus.CANCELED)
# 参与WIP估值的订单状态
WIP_ORDER_STATUSES = (OrderStatus.PLANNED, OrderStatus.IN_PROGRESS)
