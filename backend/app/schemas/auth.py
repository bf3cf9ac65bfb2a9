"""
Pydantic schemas for authentication endpoints.
Request fields are optional so that missing values are reported through the
field checks in the router (400 with a per-field message) instead of a bare
framework error.
"""
from typing import Optional
from pydantic import BaseModel

class RegisterIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class TokenOut(BaseModel):
    token: str  # JWT access token, send back in the x-auth-token header

class UserOut(BaseModel):
    """
    User information returned to its owner. Never includes the password hash.
    """
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    date: str  # Account creation timestamp (ISO format)
