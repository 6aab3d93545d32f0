"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from langify.api.v1.endpoints import (
    auth, goals, stats, courses, lessons, vocabulary, leaderboard, teacher, admin
)

api_router = APIRouter()

# Include all endpoint routers
# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(auth.router)
api_router.include_router(goals.router)
api_router.include_router(stats.router)
api_router.include_router(courses.router)
api_router.include_router(lessons.router)
api_router.include_router(vocabulary.router)
api_router.include_router(leaderboard.router)
api_router.include_router(teacher.router)
api_router.include_router(admin.router)
