"""用户数据操作

定义对用户数据的增删改查操作
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.errors import IntegrityViolation, NotFoundError, PermissionDenied
from ..models import User
from ..schemas import UserCreate
from ..security import get_password_hash
from .base import commit_or_raise

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """根据用户名获取用户"""
    return db.query(User).filter(User.username == username).first()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    """根据ID获取用户"""
    return db.get(User, user_id)


def list_users(db: Session) -> List[User]:
    """用户列表，按创建时间倒序"""
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def create_user(db: Session, user_in: UserCreate) -> User:
    """创建用户，用户名重复时拒绝"""
    if get_user_by_username(db, user_in.username) is not None:
        raise IntegrityViolation("Username already exists")
    db_user = User(
        username=user_in.username,
        password_hash=get_password_hash(user_in.password),
        full_name=user_in.full_name,
        role=user_in.role,
    )
    db.add(db_user)
    commit_or_raise(db, "Username already exists")
    db.refresh(db_user)
    logger.info("user %s created with role %s", db_user.username, db_user.role.value)
    return db_user


def update_user_password(db: Session, user: User, new_password: str) -> User:
    """更新用户密码"""
    user.password_hash = get_password_hash(new_password)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, acting_user: User) -> None:
    """删除用户；不允许删除当前登录的自己"""
    if user_id == acting_user.id:
        raise PermissionDenied("You cannot delete your own account")
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    db.delete(user)
    db.commit()
    logger.info("user %s deleted by %s", user_id, acting_user.username)
