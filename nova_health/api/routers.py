from fastapi import APIRouter

from .endpoints import chat
from .endpoints import health
from .endpoints import medications

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, prefix="", tags=["health"])
api_router.include_router(chat.router, prefix="", tags=["chat"])
api_router.include_router(medications.router, prefix="", tags=["medications"])
