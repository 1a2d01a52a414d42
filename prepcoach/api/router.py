"""
Main API router for PrepCoach

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from prepcoach.api.endpoints import adaptive, analytics, evaluation, interview, metadata, records

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    interview.router,
    prefix="/interview",
    tags=["Interview"]
)

api_router.include_router(
    adaptive.router,
    prefix="/adaptive",
    tags=["Adaptive"]
)

api_router.include_router(
    evaluation.router,
    prefix="/evaluation",
    tags=["Evaluation"]
)

api_router.include_router(
    records.router,
    prefix="/records",
    tags=["Records"]
)

api_router.include_router(
    analytics.router,
    prefix="/analytics",
    tags=["Analytics"]
)

api_router.include_router(
    metadata.router,
    prefix="/metadata",
    tags=["Metadata"]
)
