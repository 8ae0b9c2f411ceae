"""订单状态历史（只追加）"""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..database.connection import Base
from .enums import OrderStatus


class OrderStatusHistory(Base):
    """订单状态变更记录，写入后不再修改"""
    __tablename__ = "order_status_history"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(Enum(OrderStatus, name="order_status"), nullable=False)
    changed_at = Column(DateTime, nullable=False)
    changed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    comment = Column(Text, nullable=True)

    order = relationship("Order", back_populates="history")
    actor = relationship("User")
