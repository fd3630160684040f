from fastapi import APIRouter

from . import auth, home, locations, provinces, regions, supermarkets, tickets

api_router = APIRouter()
api_router.include_router(home.router)
api_router.include_router(auth.router)
api_router.include_router(regions.router)
api_router.include_router(provinces.router)
api_router.include_router(supermarkets.router)
api_router.include_router(locations.router)
api_router.include_router(tickets.router)

__all__ = ["api_router"]
