"""工序数据库模型

定义工序相关的数据模型
"""

from sqlalchemy import Column, Integer, String

from ..database.connection import Base


class Operation(Base):
    """工序表"""
    __tablename__ = "operations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)  # 工序名称
    default_minutes = Column(Integer, nullable=True)  # 默认计划工时（分钟）
