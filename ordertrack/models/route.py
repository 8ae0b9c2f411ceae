"""工艺路线模型

RouteStep 描述订单明细的加工链，step_no 在同一明细内唯一且严格递增；
OperationLog 记录每一次执行（可多次重试）。
"""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database.connection import Base
from .enums import LogStatus, StepStatus


class RouteStep(Base):
    """工艺路线步骤表"""
    __tablename__ = "route_steps"
    __table_args__ = (UniqueConstraint("order_item_id", "step_no", name="uq_route_steps_item_step_no"),)

    id = Column(Integer, primary_key=True, index=True)
    order_item_id = Column(Integer, ForeignKey("order_items.id", ondelete="CASCADE"), nullable=False, index=True)
    step_no = Column(Integer, nullable=False)
    operation_id = Column(Integer, ForeignKey("operations.id"), nullable=False)
    workshop_id = Column(Integer, ForeignKey("workshops.id", ondelete="SET NULL"), nullable=True)
    status = Column(Enum(StepStatus, name="step_status"), nullable=False, default=StepStatus.PLANNED)
    planned_minutes = Column(Integer, nullable=True)  # 为空时使用工序默认工时
    planned_start = Column(DateTime, nullable=True)
    planned_finish = Column(DateTime, nullable=True)

    item = relationship("OrderItem", back_populates="steps")
    operation = relationship("Operation")
    workshop = relationship("Workshop")
    logs = relationship(
        "OperationLog", back_populates="step", cascade="all, delete-orphan", order_by="OperationLog.id"
    )


class OperationLog(Base):
    """工序执行记录表"""
    __tablename__ = "operation_logs"

    id = Column(Integer, primary_key=True, index=True)
    route_step_id = Column(Integer, ForeignKey("route_steps.id", ondelete="CASCADE"), nullable=False, index=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id", ondelete="SET NULL"), nullable=True, index=True)
    operator_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    started_at = Column(DateTime, nullable=True)
    finished_at = Column(DateTime, nullable=True)  # 执行中为空
    status = Column(Enum(LogStatus, name="log_status"), nullable=False, default=LogStatus.IN_PROGRESS)
    result_note = Column(Text, nullable=True)

    step = relationship("RouteStep", back_populates="logs")
    equipment = relationship("Equipment")
    operator = relationship("User")
