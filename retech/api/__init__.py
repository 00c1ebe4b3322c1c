# retech/api/__init__.py
from fastapi import FastAPI
from retech.api.routers import admin, carts, health, orders, products, users


def create_app() -> FastAPI:
    app = FastAPI(
        title="ReTech Storefront",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(admin.router)

    return app
