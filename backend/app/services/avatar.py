"""
Gravatar URL derivation.

The avatar is a pure function of the email address: no network call is made
and the same (normalized) email always yields the same URL.
"""
import hashlib
from urllib.parse import urlencode

from app.config import settings

GRAVATAR_BASE = "https://www.gravatar.com/avatar/"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def gravatar_url(email: str) -> str:
    digest = hashlib.md5(normalize_email(email).encode("utf-8")).hexdigest()
    query = urlencode({
        "s": settings.avatar_size,
        "r": settings.avatar_rating,
        "d": settings.avatar_default,
    })
    return f"{GRAVATAR_BASE}{digest}?{query}"
