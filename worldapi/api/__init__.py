"""API routes. Protected routers are guarded by the session dependency."""

from fastapi import APIRouter, Depends

from worldapi.api import auth, cities, countries, health

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(
    cities.router,
    tags=["cities"],
    dependencies=[Depends(auth.require_session)],
)
router.include_router(
    countries.router,
    tags=["countries"],
    dependencies=[Depends(auth.require_session)],
)
