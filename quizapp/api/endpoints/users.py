"""
User endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizapp.core.database import get_db
from quizapp.core.exceptions import handle_route_errors
from quizapp.schemas.user import UserDetails
from quizapp.services import progression
from quizapp.services.users import UserService

router = APIRouter()


@router.get("/getUserDetails/{user_id}", response_model=UserDetails)
@handle_route_errors("An error occurred while fetching user details")
def get_user_details(user_id: int, db: Session = Depends(get_db)):
    """User with quizzes, friends and friend requests populated; refreshes the average score"""
    progression.update_average_score(db, user_id)
    return UserDetails.model_validate(UserService.get_user_details(db, user_id))
