# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.routers import health, webhooks, users, products, carts, wishlist, orders, admin


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(webhooks.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(wishlist.router)
    app.include_router(orders.router)
    app.include_router(admin.router)
    return app
