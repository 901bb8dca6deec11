"""
API main router
Combines all endpoint routers
"""

from fastapi import APIRouter

from quizapp.api.endpoints import ai, auth, health, leaderboard, quizzes, social, users

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(quizzes.router, tags=["Quizzes"])
api_router.include_router(social.router, tags=["Friends"])
api_router.include_router(leaderboard.router, tags=["Leaderboard"])
api_router.include_router(ai.router, tags=["AI"])
api_router.include_router(health.router, tags=["Health"])
