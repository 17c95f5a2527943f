from fastapi import APIRouter
from aquaflow.api.rest import users, service_areas, addresses, inventory, orders, invoices

api_router = APIRouter()
api_router.include_router(users.router)
api_router.include_router(service_areas.router)
api_router.include_router(addresses.router)
api_router.include_router(inventory.router)
api_router.include_router(orders.router)
api_router.include_router(invoices.router)
