"""FastAPI主应用入口

实现订单跟踪的RESTful API服务：
- 使用依赖注入管理数据库会话、时间源和当前用户
- 领域异常统一转换为 JSON 错误响应
- 所有业务路由挂载在 /api/v1 下
"""

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .api.v1 import (
    auth_router,
    catalog_router,
    intake_router,
    orders_router,
    reports_router,
    routing_router,
    stats_router,
    users_router,
)
from .config.settings import settings
from .core.errors import IntegrityViolation, NotFoundError, PermissionDenied
from .database.connection import get_db
from .logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# 创建FastAPI应用实例
app = FastAPI(title=settings.APP_TITLE, description=settings.APP_DESCRIPTION, version=settings.APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 挂载API路由
for router in (
    auth_router,
    intake_router,
    users_router,
    orders_router,
    routing_router,
    catalog_router,
    reports_router,
    stats_router,
):
    app.include_router(router, prefix="/api/v1")


@app.exception_handler(NotFoundError)
def handle_not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.detail})


@app.exception_handler(IntegrityViolation)
def handle_integrity_violation(request: Request, exc: IntegrityViolation):
    return JSONResponse(status_code=400, content={"detail": exc.detail})


@app.exception_handler(PermissionDenied)
def handle_permission_denied(request: Request, exc: PermissionDenied):
    return JSONResponse(status_code=400, content={"detail": exc.detail})


@app.exception_handler(IntegrityError)
def handle_db_integrity_error(request: Request, exc: IntegrityError):
    logger.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=400, content={"detail": "Integrity constraint violated"})


@app.exception_handler(SQLAlchemyError)
def handle_db_error(request: Request, exc: SQLAlchemyError):
    logger.error("database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health/db")
def health_check(db: Session = Depends(get_db)):
    """数据库连通性检查"""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("database health check failed")
        raise HTTPException(status_code=503, detail="Database connection failed")
    return {"status": "ok"}


@app.get("/", response_class=PlainTextResponse)
def read_root():
    return "Order tracking backend is running"
