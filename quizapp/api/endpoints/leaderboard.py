"""
Leaderboard endpoints
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizapp.core.database import get_db
from quizapp.core.exceptions import handle_route_errors
from quizapp.schemas.leaderboard import LeaderboardEntry
from quizapp.services.leaderboard import LeaderboardService

router = APIRouter()


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
@handle_route_errors("An error occurred while fetching the leaderboard")
def get_leaderboard(db: Session = Depends(get_db)):
    """Top ten users by xp plus daily streak"""
    return LeaderboardService.get_global_leaderboard(db)
