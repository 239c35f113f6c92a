"""Signup, session login/logout, and the session dependency guarding protected routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from worldapi.api.deps import (
    credentials_body,
    get_app_settings,
    get_session_gate,
    get_user_store,
)
from worldapi.core.config import Settings
from worldapi.core.security import PasswordHashError, hash_password, verify_password
from worldapi.schemas.auth import Credentials, CurrentUser, WhoAmIResponse
from worldapi.services.sessions import SessionGate
from worldapi.services.users import UserAlreadyExistsError, UserStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def require_session(
    request: Request,
    gate: Annotated[SessionGate, Depends(get_session_gate)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CurrentUser:
    """
    Dependency: require a live session cookie. Raises 403 before the handler runs otherwise.
    Handlers get the username from the returned CurrentUser.
    """
    username = gate.validate(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if username is None:
        raise _forbidden("Please log in.")
    return CurrentUser(username=username)


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_class=Response)
def signup(
    body: Annotated[Credentials, Depends(credentials_body)],
    store: Annotated[UserStore, Depends(get_user_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Response:
    """Create a user. 400 on empty fields, 409 if the username is taken."""
    if not body.username or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required.",
        )
    if store.count_users(body.username) > 0:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists.")

    password_hash = hash_password(body.password, rounds=settings.BCRYPT_ROUNDS)
    try:
        store.insert_user(body.username, password_hash)
    except UserAlreadyExistsError:
        # Lost a race with a concurrent signup for the same name.
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists.")
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/login", response_class=Response)
def login(
    body: Annotated[Credentials, Depends(credentials_body)],
    store: Annotated[UserStore, Depends(get_user_store)],
    gate: Annotated[SessionGate, Depends(get_session_gate)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Response:
    """
    Check username and password and start a session.
    The session cookie is set on the response; the body is empty.
    """
    user = store.find_by_username(body.username)
    if user is None:
        logger.warning("Login failed: unknown username=%s", body.username)
        raise _forbidden("Invalid username or password.")
    try:
        matched = verify_password(body.password, user.password_hash)
    except PasswordHashError:
        logger.exception("Login failed: unusable password hash for username=%s", body.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error.",
        )
    if not matched:
        logger.warning("Login failed: wrong password for username=%s", body.username)
        raise _forbidden("Invalid username or password.")

    token = gate.issue(user.username)
    response = Response(status_code=status.HTTP_200_OK)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(gate.max_age.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("Login succeeded: username=%s", user.username)
    return response


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def logout(
    request: Request,
    gate: Annotated[SessionGate, Depends(get_session_gate)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Response:
    """End the current session, if any, and clear the cookie."""
    gate.revoke(request.cookies.get(settings.SESSION_COOKIE_NAME))
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return response


@router.get("/whoami", response_model=WhoAmIResponse)
def whoami(
    current_user: Annotated[CurrentUser, Depends(require_session)],
) -> WhoAmIResponse:
    return WhoAmIResponse(username=current_user.username)
