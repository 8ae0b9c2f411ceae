"""数据库操作（CRUD）入口"""

from . import reports
from .catalog import (
    create_customer,
    create_equipment,
    create_material,
    create_operation,
    create_product,
    create_workshop,
    find_or_add_customer,
    list_customers,
    list_equipment,
    list_materials,
    list_operations,
    list_products,
    list_workshops,
)
from .order import (
    add_order_item,
    create_intake_order,
    create_order,
    delete_order,
    get_order,
    get_order_or_404,
    list_order_history,
    list_orders,
    update_order_status,
)
from .routing import (
    append_route_step,
    finish_operation_log,
    get_item_or_404,
    get_route,
    get_step_or_404,
    start_operation_log,
    update_step_status,
)
from .user import (
    create_user,
    delete_user,
    get_user_by_id,
    get_user_by_username,
    list_users,
    update_user_password,
)

__all__ = [
    "reports",
    # Catalog
    "create_customer",
    "create_equipment",
    "create_material",
    "create_operation",
    "create_product",
    "create_workshop",
    "find_or_add_customer",
    "list_customers",
    "list_equipment",
    "list_materials",
    "list_operations",
    "list_products",
    "list_workshops",
    # Orders
    "add_order_item",
    "create_intake_order",
    "create_order",
    "delete_order",
    "get_order",
    "get_order_or_404",
    "list_order_history",
    "list_orders",
    "update_order_status",
    # Routing
    "append_route_step",
    "finish_operation_log",
    "get_item_or_404",
    "get_route",
    "get_step_or_404",
    "start_operation_log",
    "update_step_status",
    # Users
    "create_user",
    "delete_user",
    "get_user_by_id",
    "get_user_by_username",
    "list_users",
    "update_user_password",
]
