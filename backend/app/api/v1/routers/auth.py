import logging

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends
from tortoise.exceptions import IntegrityError

from app.api.v1.deps import get_current_user
from app.core.errors import ConflictError, ValidationError, field_error
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.schemas.auth import LoginIn, RegisterIn, TokenOut, UserOut
from app.services.avatar import gravatar_url, normalize_email

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6
EMAIL_TAKEN_MSG = "A user with this email ID already exists"
INVALID_CREDENTIALS_MSG = "Invalid credentials"


def _is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _user_to_dict(u: User) -> dict:
    """
    Convert a User to its API representation (password hash excluded).
    """
    return {
        "id": str(u.id),
        "name": u.name,
        "email": u.email,
        "avatar": u.avatar,
        "date": u.created_at.isoformat() if u.created_at else None,
    }


@router.post("/register", response_model=TokenOut)
async def register(body: RegisterIn):
    """
    Register a new user account and return an access token.

    The email is normalized to lowercase, the avatar is derived from it
    (Gravatar) and the password is hashed before storage.

    Returns:
        dict: {"token": <JWT>}

    Raises:
        ValidationError (400): Missing name, malformed email or short password
        ConflictError (400): Email already registered
    """
    errors = []
    if not body.name or not body.name.strip():
        errors.append(field_error("name", "Name is required"))
    if not _is_valid_email(body.email):
        errors.append(field_error("email", "Please enter a valid email ID"))
    if not body.password or len(body.password) < MIN_PASSWORD_LENGTH:
        errors.append(field_error("password", "Password must contain a minimum of 6 characters"))
    if errors:
        raise ValidationError(errors)

    email = normalize_email(body.email)
    if await User.filter(email=email).exists():
        raise ConflictError(EMAIL_TAKEN_MSG)

    try:
        u = await User.create(
            name=body.name.strip(),
            email=email,
            avatar=gravatar_url(email),
            password_hash=hash_password(body.password),
        )
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        raise ConflictError(EMAIL_TAKEN_MSG)

    logger.info("[auth] registered user id=%s", u.id)
    return {"token": create_access_token(str(u.id))}


@router.post("/login", response_model=TokenOut)
async def login(body: LoginIn):
    """
    Exchange email and password for an access token.

    Unknown email and wrong password produce the same error so that the
    response does not reveal which accounts exist.
    """
    errors = []
    if not _is_valid_email(body.email):
        errors.append(field_error("email", "Please enter a valid email ID"))
    if not body.password:
        errors.append(field_error("password", "Password is required"))
    if errors:
        raise ValidationError(errors)

    user = await User.get_or_none(email=normalize_email(body.email))
    if not user or not verify_password(body.password, user.password_hash):
        logger.info("[auth] failed login attempt")
        raise ValidationError([{"msg": INVALID_CREDENTIALS_MSG}])
    return {"token": create_access_token(str(user.id))}


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)):
    """
    Get the account behind the current token.

    Raises:
        AuthError (401): Missing or invalid token
        NotFoundError (404): The user was deleted after the token was issued
    """
    return _user_to_dict(user)
