"""可注入的时间源

所有“当前时间”都从这里取得，测试中通过 dependency_overrides 替换为固定时间。
"""

from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """返回不带时区信息的 UTC 时间（与数据库中的 DateTime 列一致）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_clock() -> Clock:
    """FastAPI 依赖：返回时间源"""
    return utcnow


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """带时区的时间换算为 UTC 后去掉时区；不带时区的时间视为 UTC 原样返回"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
