"""用户数据结构定义

定义用户相关的Pydantic模型
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import UserRole


class UserBase(BaseModel):
    """用户基础模型"""
    username: str = Field(..., min_length=1, max_length=50)
    full_name: Optional[str] = None


class UserCreate(UserBase):
    """创建用户时的模型，未指定角色时为 MANAGER"""
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.MANAGER


class UserRead(UserBase):
    """读取用户时的模型"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    role: UserRole
    created_at: Optional[datetime] = None


class UserLogin(BaseModel):
    """用户登录模型"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Token(BaseModel):
    token: str
    username: str
    role: UserRole
