"""
API v1 router.

Aggregates all v1 endpoints.  Every route requires the bearer token.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import require_token
from app.api.v1.endpoints import militaries, processes, ranking

api_router = APIRouter(dependencies=[Depends(require_token)])

# Include endpoint routers
api_router.include_router(
    militaries.router, prefix="/militaries", tags=["Militaries"]
)
api_router.include_router(
    processes.router, prefix="/processes", tags=["Processes"]
)
api_router.include_router(
    ranking.router, tags=["Ranking"]
)
