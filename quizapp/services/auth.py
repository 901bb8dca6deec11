"""
Authentication service for QuizApp
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizapp.core.exceptions import AuthenticationException, DuplicateException
from quizapp.core.security import get_password_hash, verify_password
from quizapp.models import User
from quizapp.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service"""

    @staticmethod
    def authenticate_user(db: Session, username: str, password: str) -> User:
        """
        Check a username/password pair

        Raises:
            AuthenticationException: Unknown user or wrong password
        """
        user = db.query(User).filter(User.username == username).first()

        if not user or not verify_password(password, user.hashed_password):
            logger.info("Failed login", extra={"username": username})
            raise AuthenticationException("Invalid credentials.")

        return user

    @staticmethod
    def create_user(db: Session, user_create: UserCreate) -> User:
        """
        Register a new user

        Raises:
            DuplicateException: Username or email already taken
        """
        existing_user = db.query(User).filter(
            (User.username == user_create.name) | (User.email == user_create.email)
        ).first()

        if existing_user:
            if existing_user.username == user_create.name:
                raise DuplicateException("A user with the given username is already registered")
            raise DuplicateException("A user with the given email is already registered")

        db_user = User(
            username=user_create.name,
            fullname=user_create.fullname,
            email=user_create.email,
            hashed_password=get_password_hash(user_create.password),
        )

        db.add(db_user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateException("A user with the given username or email is already registered")
        db.refresh(db_user)

        logger.info("User registered", extra={"user_id": db_user.id})
        return db_user


auth_service = AuthService()
