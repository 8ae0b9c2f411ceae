"""CRUD 公共工具"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.errors import IntegrityViolation

logger = logging.getLogger(__name__)


def require(db: Session, model, obj_id, label: str):
    """加载被引用的记录，不存在时拒绝写入"""
    if obj_id is None:
        return None
    obj = db.get(model, obj_id)
    if obj is None:
        raise IntegrityViolation(f"{label} {obj_id} does not exist")
    return obj


def commit_or_raise(db: Session, detail: str) -> None:
    """提交事务；约束冲突时回滚并转换为 IntegrityViolation"""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("integrity error: %s (%s)", detail, exc.orig)
        raise IntegrityViolation(detail) from exc
