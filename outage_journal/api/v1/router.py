"""Main API router."""

from fastapi import APIRouter

from outage_journal.api.v1.endpoints import (
    analytics,
    auth,
    cells,
    events,
    lines,
    reference_data,
    reports,
    substations,
    topology,
    tps,
    users,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/auth/users", tags=["users"])
api_router.include_router(reference_data.router, prefix="/reference-data", tags=["reference-data"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(substations.router, prefix="/substations", tags=["substations"])
api_router.include_router(cells.router, prefix="/cells", tags=["cells"])
api_router.include_router(lines.router, prefix="/lines", tags=["lines"])
api_router.include_router(tps.router, prefix="/tps", tags=["tps"])
api_router.include_router(topology.router, prefix="/topology", tags=["topology"])
