"""
Authentication endpoints
Signup, login and logout over server-side sessions
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse

from quizapp.api.deps import RequestContext, get_request_context, require_user
from quizapp.core.config import settings
from quizapp.core.exceptions import handle_route_errors
from quizapp.core.security import create_session, destroy_session
from quizapp.models import UserSession
from quizapp.schemas.user import AuthResult, CurrentUser, UserCreate, UserLogin, UserResponse
from quizapp.services.auth import auth_service

router = APIRouter()


def _set_session_cookie(response: Response, session: UserSession) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.token,
        max_age=settings.SESSION_TTL_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


@router.post("/signup", response_model=AuthResult)
@handle_route_errors("Registration failed.")
def signup(
    user_create: UserCreate,
    response: Response,
    context: RequestContext = Depends(get_request_context),
):
    """Register a new user and sign them in"""
    user = auth_service.create_user(context.db, user_create)
    context.session = create_session(context.db, user)
    context.flash("success", "Registration successful.")
    _set_session_cookie(response, context.session)
    return AuthResult(success="Registration successful.", user_id=user.id)


@router.post("/login", response_model=AuthResult)
@handle_route_errors("An error occurred during authentication.")
def login(
    credentials: UserLogin,
    response: Response,
    context: RequestContext = Depends(get_request_context),
):
    """Sign in with username and password"""
    user = auth_service.authenticate_user(context.db, credentials.username, credentials.password)
    context.session = create_session(context.db, user)
    _set_session_cookie(response, context.session)
    return AuthResult(success="Login successful.", user_id=user.id)


@router.get("/logout")
@handle_route_errors("Logout failed.")
def logout(request: Request, context: RequestContext = Depends(get_request_context)):
    """End the session and send the browser back to the frontend"""
    destroy_session(context.db, request.cookies.get(settings.SESSION_COOKIE_NAME))
    response = RedirectResponse(url=f"{settings.FRONTEND_HOST}/", status_code=302)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/currentUser", response_model=CurrentUser)
@handle_route_errors("An error occurred while fetching the current user")
def current_user(context: RequestContext = Depends(require_user)):
    """Signed-in user plus any messages queued on the session"""
    return CurrentUser(
        user=UserResponse.model_validate(context.user),
        messages=context.pop_messages(),
    )
