"""密码哈希

新密码统一用 pbkdf2_sha256 哈希（没有长度上限，密码原样参与计算）；
从旧系统导入的 bcrypt 哈希仍可校验（需要安装 bcrypt 后端）。
"""

from passlib.context import CryptContext
from passlib.exc import MissingBackendError

pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """校验密码；格式无法识别或缺少 bcrypt 后端的哈希按校验失败处理"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError, MissingBackendError):
        return False
