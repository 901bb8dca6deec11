"""
Social service
Friend requests, friendships, suggestions and the friends activity feed
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from quizapp.core.database import with_db_retry
from quizapp.core.exceptions import DuplicateException, NotFoundException
from quizapp.models import FriendRequest, Friendship, QuizResult, User
from quizapp.services.users import UserService
from quizapp.utils.dates import utcnow

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 10
ACTIVITY_LIMIT = 10


class SocialService:
    @staticmethod
    def send_friend_request(db: Session, sender_id: int, username: str) -> User:
        """
        Queue a request from ``sender_id`` on the user called ``username``

        A request in the opposite direction is independent and does not
        block this one.

        Raises:
            NotFoundException: Unknown target or sender
            DuplicateException: Sender is already waiting on the target
        """
        receiver = UserService.get_user_by_username(db, username)
        if not receiver:
            raise NotFoundException("User")

        if not UserService.get_user(db, sender_id):
            raise NotFoundException("User")

        if sender_id in [request.sender_id for request in receiver.received_requests]:
            raise DuplicateException("Friend request already sent")

        receiver.received_requests.append(FriendRequest(sender_id=sender_id))
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with an identical request
            db.rollback()
            raise DuplicateException("Friend request already sent")

        logger.info(
            "Friend request sent",
            extra={"sender_id": sender_id, "receiver_id": receiver.id},
        )
        return receiver

    @staticmethod
    @with_db_retry()
    def accept_friend_request(db: Session, user_id: int, friend_id: int) -> User:
        """
        Make ``user_id`` and ``friend_id`` friends and drop the pending request

        Both users are written in a single transaction. The request does not
        have to exist, and a reciprocal request waiting on the friend is left
        in place.

        Raises:
            NotFoundException: Either user is missing
        """
        user = db.query(User).filter(User.id == user_id).first()
        friend = db.query(User).filter(User.id == friend_id).first()
        if not user or not friend:
            raise NotFoundException("User")

        if friend_id not in user.friend_ids:
            user.friendships.append(Friendship(friend_id=friend_id))
        if user_id not in friend.friend_ids:
            friend.friendships.append(Friendship(friend_id=user_id))

        user.received_requests = [
            request for request in user.received_requests if request.sender_id != friend_id
        ]

        # Touch both rows so a concurrent writer on either user is detected
        now = utcnow()
        user.updated_at = now
        friend.updated_at = now

        db.commit()
        logger.info("Friend request accepted", extra={"user_id": user_id, "friend_id": friend_id})
        return user

    @staticmethod
    def get_friends(db: Session, user_id: int) -> List[User]:
        user = UserService.get_user_or_404(db, user_id)
        return user.friends

    @staticmethod
    def get_friend_requests(db: Session, user_id: int) -> List[User]:
        user = UserService.get_user_or_404(db, user_id)
        return user.friend_requests

    @staticmethod
    def get_friend_suggestions(db: Session, user_id: int) -> List[User]:
        """Up to ten users who are neither the user nor already friends"""
        user = UserService.get_user_or_404(db, user_id)
        excluded = [user.id, *user.friend_ids]
        return (
            db.query(User)
            .filter(User.id.notin_(excluded))
            .order_by(User.id)
            .limit(SUGGESTION_LIMIT)
            .all()
        )

    @staticmethod
    def get_friends_activities(db: Session, user_id: int) -> List[QuizResult]:
        """The most recent quiz results across all of the user's friends"""
        user = UserService.get_user_or_404(db, user_id)
        friend_ids = user.friend_ids
        if not friend_ids:
            return []

        return (
            db.query(QuizResult)
            .options(selectinload(QuizResult.quiz))
            .filter(QuizResult.user_id.in_(friend_ids))
            .order_by(QuizResult.created_at.desc(), QuizResult.id.desc())
            .limit(ACTIVITY_LIMIT)
            .all()
        )
