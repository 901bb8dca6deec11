"""
Request-scoped dependencies
The request context carries the signed-in user and one-shot messages explicitly
"""

from dataclasses import dataclass
from typing import List, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from quizapp.core.config import settings
from quizapp.core.database import get_db
from quizapp.core.exceptions import AuthenticationException
from quizapp.core.security import resolve_session
from quizapp.models import User, UserSession


@dataclass
class RequestContext:
    """Identity and transient messages for one request"""

    db: Session
    session: Optional[UserSession] = None

    @property
    def user(self) -> Optional[User]:
        return self.session.user if self.session else None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    def flash(self, category: str, message: str) -> None:
        """Queue a message for the next read of this session"""
        if self.session is None:
            return
        self.session.messages = [*self.session.messages, {"category": category, "message": message}]
        self.db.commit()

    def pop_messages(self) -> List[dict]:
        """Return and clear the queued messages"""
        if self.session is None or not self.session.messages:
            return []
        messages = list(self.session.messages)
        self.session.messages = []
        self.db.commit()
        return messages


def get_request_context(request: Request, db: Session = Depends(get_db)) -> RequestContext:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return RequestContext(db=db, session=resolve_session(db, token))


def require_user(context: RequestContext = Depends(get_request_context)) -> RequestContext:
    """Dependency for routes that need a signed-in user"""
    if not context.is_authenticated:
        raise AuthenticationException("Not authenticated")
    return context
