# app/core/security.py
"""
Security module for authentication.
Handles password hashing, JWT token creation/validation and token resolution
for the auth gate.
"""
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext

from app.config import settings
from app.core.errors import AuthError

NO_TOKEN_MSG = "No token, access denied"
INVALID_TOKEN_MSG = "Token is invalid"

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",   # Automatically handle deprecated schemes
)

# JWT configuration (fixed for the lifetime of the process)
JWT_SECRET = settings.jwt_secret
JWT_ALG = settings.jwt_algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise (including unparseable hashes)
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def create_access_token(user_id: str, expires_delta: dt.timedelta | None = None) -> str:
    """
    Create a JWT access token asserting a user identity.

    Args:
        user_id: Unique user identifier (UUID string)
        expires_delta: Token lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded JWT token string

    Token payload includes:
        - sub: Subject (user ID)
        - iat: Issued at timestamp
        - exp: Expiration timestamp
    """
    if expires_delta is None:
        expires_delta = dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid, malformed or lacks sub/exp
    """
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG], options={"require": ["sub", "exp"]})


def resolve_user_id(token: str | None, now: dt.datetime | None = None) -> str:
    """
    Resolve the user id asserted by a token, or reject it.

    This is the whole decision of the auth gate: it depends only on the token,
    the signing key and the current time (``now`` defaults to the wall clock).

    Raises:
        AuthError: "No token, access denied" when the token is missing,
            "Token is invalid" when it is malformed, wrongly signed or expired.
    """
    if not token:
        raise AuthError(NO_TOKEN_MSG)
    try:
        if now is None:
            payload = decode_access_token(token)
        else:
            payload = jwt.decode(
                token,
                JWT_SECRET,
                algorithms=[JWT_ALG],
                options={"require": ["sub", "exp"], "verify_exp": False},
            )
            if payload["exp"] <= now.timestamp():
                raise jwt.ExpiredSignatureError("Signature has expired")
    except jwt.PyJWTError:
        raise AuthError(INVALID_TOKEN_MSG)

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise AuthError(INVALID_TOKEN_MSG)
    return user_id
