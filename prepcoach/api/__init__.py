"""
API layer for PrepCoach

Contains FastAPI routers for:
- Interview sessions
- Adaptive difficulty and tone decisions
- Answer scoring
- Evaluation records
- Analytics dashboard and coaching
"""

from prepcoach.api.router import api_router

__all__ = ["api_router"]
