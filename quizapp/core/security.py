"""
Security utilities for authentication
Handles password hashing and server-side login sessions
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

import sentry_sdk
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from quizapp.core.config import settings
from quizapp.models import User, UserSession
from quizapp.utils.dates import utcnow

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against hashed password"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification failed: {e}")
        if settings.SENTRY_DSN:
            sentry_sdk.capture_exception(e)
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


def generate_session_token() -> str:
    """Generate an opaque session token"""
    return secrets.token_urlsafe(32)


def create_session(db: Session, user: User) -> UserSession:
    """Open a server-side session for ``user``"""
    now = utcnow()
    session = UserSession(
        token=generate_session_token(),
        user_id=user.id,
        messages=[],
        created_at=now,
        expires_at=now + timedelta(days=settings.SESSION_TTL_DAYS),
    )
    db.add(session)
    db.commit()
    return session


def resolve_session(db: Session, token: Optional[str]) -> Optional[UserSession]:
    """Return the live session for ``token``; expired sessions are deleted"""
    if not token:
        return None

    session = db.query(UserSession).filter(UserSession.token == token).first()
    if not session:
        return None

    if session.expires_at < utcnow():
        db.delete(session)
        db.commit()
        return None

    return session


def destroy_session(db: Session, token: Optional[str]) -> None:
    """Delete the session for ``token`` if there is one"""
    if token:
        db.query(UserSession).filter(UserSession.token == token).delete()
        db.commit()
