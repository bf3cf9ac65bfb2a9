import uuid

from fastapi import Depends, Header, Request
from app.config import settings
from app.core.errors import NotFoundError
from app.core.security import resolve_user_id
from app.models.user import User

USER_NOT_FOUND_MSG = "User not found"

async def get_current_user_id(
    request: Request,
    authorization: str | None = Header(default=None),
) -> str:
    """
    FastAPI dependency implementing the auth gate.

    The token is read from the configured header (``x-auth-token`` by default),
    falling back to ``Authorization: Bearer <token>``. On success the resolved
    user id is stored on ``request.state.user_id`` and returned.

    Raises:
        AuthError (401): "No token, access denied" if no token was sent
        AuthError (401): "Token is invalid" if the token is malformed, wrongly signed or expired

    Usage:
        @router.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user_id)):
            ...
    """
    token = request.headers.get(settings.token_header)
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()

    user_id = resolve_user_id(token)
    request.state.user_id = user_id
    return user_id

async def get_current_user(user_id: str = Depends(get_current_user_id)) -> User:
    """
    Load the User behind a valid token.

    Raises:
        NotFoundError (404): If the user was deleted after the token was issued
    """
    user = await User.get_or_none(id=parse_id(user_id, USER_NOT_FOUND_MSG))
    if not user:
        raise NotFoundError(USER_NOT_FOUND_MSG)
    return user

def parse_id(raw: str, not_found_msg: str) -> uuid.UUID:
    """
    Parse a record id from a path or token claim.
    A malformed id is reported exactly like a missing record.
    """
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise NotFoundError(not_found_msg)
