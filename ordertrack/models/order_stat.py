"""订单统计汇总表

由 scripts/refresh_order_stats.py 定期重建，报表层只读取。
"""

from sqlalchemy import Column, Date, Integer, String

from ..database.connection import Base


class OrderStat(Base):
    """按日期与状态汇总的订单数量"""
    __tablename__ = "order_stats"

    day = Column(Date, primary_key=True)
    status = Column(String(32), primary_key=True)
    orders_count = Column(Integer, nullable=False, default=0)
