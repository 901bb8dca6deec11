"""User service"""

from typing import Optional

from sqlalchemy.orm import Session, selectinload

from quizapp.core.exceptions import NotFoundException
from quizapp.models import FriendRequest, Friendship, User


class UserService:
    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_or_404(db: Session, user_id: int) -> User:
        user = UserService.get_user(db, user_id)
        if not user:
            raise NotFoundException("User")
        return user

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def get_user_details(db: Session, user_id: int) -> User:
        """User with owned quizzes, friends and pending senders loaded"""
        user = (
            db.query(User)
            .options(
                selectinload(User.quizzes),
                selectinload(User.friendships).selectinload(Friendship.friend),
                selectinload(User.received_requests).selectinload(FriendRequest.sender),
            )
            .populate_existing()
            .filter(User.id == user_id)
            .first()
        )
        if not user:
            raise NotFoundException("User")
        return user
