from storefront.api.errors import register_exception_handlers
from storefront.api.routes import (
    admin_router,
    cart_router,
    customer_router,
    order_router,
    product_router,
    review_router,
)

routers = [order_router, admin_router, cart_router, review_router, product_router, customer_router]

__all__ = [
    "admin_router",
    "cart_router",
    "customer_router",
    "order_router",
    "product_router",
    "register_exception_handlers",
    "review_router",
    "routers",
]
