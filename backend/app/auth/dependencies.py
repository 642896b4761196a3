"""
Authentication dependencies for FastAPI routes.

A request is authenticated by a JWT found in, in order:
- the Authorization header (Bearer token)
- the x-auth-token header (older clients)
- the access_token HttpOnly cookie
"""

from fastapi import Cookie, Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.db import get_db
from core.logging import bind_context
from core.models import User

from .jwt import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
) -> str:
    """Extract the JWT from the request or reject with 401."""
    token = token_header or x_auth_token or access_token_cookie
    if not token:
        raise _unauthorized("No token, authorization denied")
    return token


def get_current_user(
    token: str = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the authenticated user.

    Steps:
    1) Extract token from header or cookie
    2) Decode JWT and read the subject (user id)
    3) Load the user from DB or raise 401
    """
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise _unauthorized("Token is not valid") from None

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise _unauthorized("Token is not valid") from None

    user = db.get(User, user_id)
    if not user:
        raise _unauthorized("User not found")

    bind_context(user_id=user.id)
    return user
