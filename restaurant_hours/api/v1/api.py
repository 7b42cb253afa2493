from fastapi import APIRouter

from restaurant_hours.api.v1.routers import restaurant_locations as restaurant_locations_router

router = APIRouter()

# admin routes
router.include_router(restaurant_locations_router.router)
