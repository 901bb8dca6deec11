"""
Progression service
XP and level, daily streak and average score bookkeeping for users
"""

import logging
import math
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from quizapp.core.database import with_db_retry
from quizapp.models import QuizResult, User
from quizapp.utils.dates import utcnow, whole_days_between

logger = logging.getLogger(__name__)

XP_PER_LEVEL = 100
QUIZ_CREATION_XP = 2


def xp_for_score(score: float) -> int:
    """XP granted for a submitted score: one point per ten percent"""
    return math.floor(score / 10)


def apply_level_ups(xp: int, level: int, xp_to_next_level: int) -> Tuple[int, int]:
    """
    Level the user up until ``xp`` is below the threshold

    XP is cumulative and is not spent on levels; each level raises the
    threshold by XP_PER_LEVEL, so the number of level-ups has a closed form.

    Returns:
        Tuple of (level, xp_to_next_level)
    """
    if xp < xp_to_next_level:
        return level, xp_to_next_level

    level_ups = (xp - xp_to_next_level) // XP_PER_LEVEL + 1
    return level + level_ups, xp_to_next_level + level_ups * XP_PER_LEVEL


def increment_user_field(db: Session, user_id: int, field: str, delta: int) -> int:
    """
    Atomically add ``delta`` to a numeric user column

    Returns:
        Number of rows updated (0 when the user does not exist)
    """
    column = getattr(User, field)
    return (
        db.query(User)
        .filter(User.id == user_id)
        .update(
            {column: column + delta, User.version_id: User.version_id + 1},
            synchronize_session=False,
        )
    )


@with_db_retry()
def update_xp_and_level(db: Session, user_id: int, xp_delta: int) -> Optional[User]:
    """Add XP to a user and apply any level-ups; unknown users are ignored"""
    if not increment_user_field(db, user_id, "xp", xp_delta):
        db.rollback()
        return None

    user = db.query(User).populate_existing().filter(User.id == user_id).first()
    previous_level = user.level
    user.level, user.xp_to_next_level = apply_level_ups(
        user.xp, user.level, user.xp_to_next_level
    )
    db.commit()

    if user.level > previous_level:
        logger.info(
            f"User {user_id} levelled up",
            extra={"user_id": user_id, "from_level": previous_level, "to_level": user.level},
        )
    return user


@with_db_retry()
def update_daily_streak(db: Session, user_id: int, now: Optional[datetime] = None) -> Optional[User]:
    """
    Advance the daily streak from the time since the user was last seen

    Exactly one day later extends the streak, a longer gap restarts it at 1,
    and the same day (or a future timestamp) leaves it alone. The reference
    timestamp always moves to ``now``.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None

    now = now or utcnow()
    diff_days = whole_days_between(user.last_signed_in, now)

    if diff_days == 1:
        user.daily_streak += 1
    elif diff_days > 1:
        user.daily_streak = 1

    user.last_signed_in = now
    db.commit()
    return user


@with_db_retry()
def update_average_score(db: Session, user_id: int) -> Optional[User]:
    """Recompute the cached mean of every score the user has submitted (0.0 without results)"""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None

    average = (
        db.query(func.avg(QuizResult.score)).filter(QuizResult.user_id == user_id).scalar()
    )
    user.average_score = float(average) if average is not None else 0.0
    db.commit()
    return user


@with_db_retry()
def record_activity(db: Session, user_id: int, activity: str) -> Optional[User]:
    """Overwrite the user's last activity line"""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None

    user.last_activity = activity
    db.commit()
    return user
