"""应用配置模块

使用 Pydantic Settings 管理应用配置，支持从 .env 文件加载环境变量
"""

import os
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # JWT配置
    SECRET_KEY: str = "change-me"  # 生产环境必须通过环境变量设置
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # 应用配置
    APP_TITLE: str = "Order Tracking"
    APP_DESCRIPTION: str = "Manufacturing order tracking API"
    APP_VERSION: str = "1.0.0"

    # 初始管理员（仅 scripts/manage_admin.py 使用）
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "password"

    # MySQL 配置
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_HOST: str = "127.0.0.1"
    MYSQL_PORT: str = "3306"
    MYSQL_DB: str = "ordertrack"

    # 数据库配置 - 优先使用DATABASE_URL，否则从MySQL配置构建
    DATABASE_URL: str = ""
    ECHO_SQL: bool = False

    # 未完工（WIP）估值：每生产小时的费率
    WIP_RATE_PER_HOUR: float = 1500.0

    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.DATABASE_URL:
            if os.path.exists("dev.db"):
                self.DATABASE_URL = "sqlite:///./dev.db"
            else:
                self.DATABASE_URL = (
                    f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
                    f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
                )


# 全局配置实例
settings = Settings()
