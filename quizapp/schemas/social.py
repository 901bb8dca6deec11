"""Friend request schemas"""

from typing import Optional

from quizapp.schemas.common import CamelModel


class FriendRequestCreate(CamelModel):
    sender_id: int
    username: str


class FriendRequestSent(CamelModel):
    success: str
    fullname: Optional[str] = None


class FriendRequestAccept(CamelModel):
    user_id: int
    friend_id: int


class FriendRequestAccepted(CamelModel):
    success: str
