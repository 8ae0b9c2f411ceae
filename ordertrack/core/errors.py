"""领域异常

CRUD 层抛出，由 main.py 中注册的异常处理器转换为 HTTP 响应。
"""


class OrderTrackError(Exception):
    """所有领域异常的基类"""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(OrderTrackError):
    """目标记录不存在"""


class IntegrityViolation(OrderTrackError):
    """引用不存在、唯一键冲突或路线顺序被破坏"""


class PermissionDenied(OrderTrackError):
    """当前主体不允许执行该操作"""
