"""Primary API router definition."""

from fastapi import APIRouter

from . import analytics, leaderboard, points, profiles, winners

api_router = APIRouter()

api_router.include_router(profiles.router)
api_router.include_router(points.router)
api_router.include_router(leaderboard.router)
api_router.include_router(winners.router)
api_router.include_router(analytics.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
