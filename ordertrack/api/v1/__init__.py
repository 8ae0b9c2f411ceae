from .auth import router as auth_router
from .catalog import router as catalog_router
from .intake import router as intake_router
from .orders import router as orders_router
from .reports import router as reports_router
from .reports import stats_router
from .routing import router as routing_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "catalog_router",
    "intake_router",
    "orders_router",
    "reports_router",
    "stats_router",
    "routing_router",
    "users_router",
]
