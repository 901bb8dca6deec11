"""
User and social graph models for QuizApp
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from quizapp.core.database import Base
from quizapp.utils.dates import utcnow


class User(Base):
    """User model"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    fullname = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    avatar_url = Column(String(500), nullable=True)

    # Progression
    xp = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    xp_to_next_level = Column(Integer, nullable=False, default=100)
    daily_streak = Column(Integer, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0.0)

    last_signed_in = Column(DateTime, nullable=False, default=utcnow)
    last_activity = Column(Text, nullable=False, default="")

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Bumped on every UPDATE; a stale write raises StaleDataError
    version_id = Column(Integer, nullable=False)

    # Relationships
    quizzes = relationship("Quiz", back_populates="creator", order_by="Quiz.id")
    results = relationship("QuizResult", back_populates="user")
    friendships = relationship(
        "Friendship",
        foreign_keys="Friendship.user_id",
        back_populates="user",
        order_by="Friendship.id",
        cascade="all, delete-orphan",
    )
    received_requests = relationship(
        "FriendRequest",
        foreign_keys="FriendRequest.receiver_id",
        back_populates="receiver",
        order_by="FriendRequest.id",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {"version_id_col": version_id}
    __table_args__ = (
        CheckConstraint("xp >= 0", name="check_xp_positive"),
        CheckConstraint("level >= 1", name="check_level_positive"),
        CheckConstraint("daily_streak >= 0", name="check_streak_positive"),
    )

    @property
    def friends(self) -> list["User"]:
        return [friendship.friend for friendship in self.friendships]

    @property
    def friend_ids(self) -> list[int]:
        return [friendship.friend_id for friendship in self.friendships]

    @property
    def friend_requests(self) -> list["User"]:
        """Pending senders, oldest first"""
        return [request.sender for request in self.received_requests]

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"


class Friendship(Base):
    """One direction of a friendship; an accepted request writes both directions"""

    __tablename__ = "friendships"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", foreign_keys=[user_id], back_populates="friendships")
    friend = relationship("User", foreign_keys=[friend_id])

    __table_args__ = (UniqueConstraint("user_id", "friend_id", name="uq_friendship_pair"),)


class FriendRequest(Base):
    """Pending request from ``sender`` waiting on ``receiver``"""

    __tablename__ = "friend_requests"

    id = Column(Integer, primary_key=True, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    receiver = relationship("User", foreign_keys=[receiver_id], back_populates="received_requests")
    sender = relationship("User", foreign_keys=[sender_id])

    __table_args__ = (UniqueConstraint("receiver_id", "sender_id", name="uq_friend_request_pair"),)
