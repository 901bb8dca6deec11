"""
Friend endpoints
Requests, friendships, suggestions and the friends activity feed
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quizapp.core.database import get_db
from quizapp.core.exceptions import handle_route_errors
from quizapp.schemas.quiz import QuizResultResponse
from quizapp.schemas.social import (
    FriendRequestAccept,
    FriendRequestAccepted,
    FriendRequestCreate,
    FriendRequestSent,
)
from quizapp.schemas.user import UserSummary
from quizapp.services.social import SocialService

router = APIRouter()


def _summaries(users) -> List[UserSummary]:
    return [UserSummary.model_validate(user) for user in users]


@router.post("/sendFriendRequestByUsername", response_model=FriendRequestSent)
@handle_route_errors("An error occurred while sending the friend request")
def send_friend_request(payload: FriendRequestCreate, db: Session = Depends(get_db)):
    receiver = SocialService.send_friend_request(db, payload.sender_id, payload.username)
    return FriendRequestSent(success="Friend request sent", fullname=receiver.fullname)


@router.post("/acceptFriendRequest", response_model=FriendRequestAccepted)
@handle_route_errors("An error occurred while accepting the friend request")
def accept_friend_request(payload: FriendRequestAccept, db: Session = Depends(get_db)):
    SocialService.accept_friend_request(db, payload.user_id, payload.friend_id)
    return FriendRequestAccepted(success="Friend request accepted")


@router.get("/getFriends/{user_id}", response_model=List[UserSummary])
@handle_route_errors("An error occurred while fetching friends")
def get_friends(user_id: int, db: Session = Depends(get_db)):
    return _summaries(SocialService.get_friends(db, user_id))


@router.get("/getFriendRequests/{user_id}", response_model=List[UserSummary])
@handle_route_errors("An error occurred while fetching friend requests")
def get_friend_requests(user_id: int, db: Session = Depends(get_db)):
    return _summaries(SocialService.get_friend_requests(db, user_id))


@router.get("/getFriendSuggestions/{user_id}", response_model=List[UserSummary])
@handle_route_errors("An error occurred while fetching friend suggestions")
def get_friend_suggestions(user_id: int, db: Session = Depends(get_db)):
    return _summaries(SocialService.get_friend_suggestions(db, user_id))


@router.get("/getFriendsActivities/{user_id}", response_model=List[QuizResultResponse])
@handle_route_errors("An error occurred while fetching friends' activities")
def get_friends_activities(user_id: int, db: Session = Depends(get_db)):
    return [
        QuizResultResponse.model_validate(result)
        for result in SocialService.get_friends_activities(db, user_id)
    ]
