# freshmarket/api/__init__.py
from fastapi import APIRouter
from freshmarket.api.routers import users, catalog, carts, orders, contact, seed

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router)
api_router.include_router(catalog.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
api_router.include_router(contact.router)
api_router.include_router(seed.router)
