"""用户表模型

定义用户相关的数据模型
"""

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.sql import func

from ..database.connection import Base
from .enums import UserRole


class User(Base):
    """用户表（既是登录主体，也是操作人）"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.MANAGER)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
