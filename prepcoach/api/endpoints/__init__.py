"""
API endpoint modules for PrepCoach
"""

from prepcoach.api.endpoints import adaptive, analytics, evaluation, interview, metadata, records

__all__ = ["adaptive", "analytics", "evaluation", "interview", "metadata", "records"]
