"""
Profile persistence: sparse create-or-update keyed by owner, embedded
experience/education entries, and whole-account deletion.
"""
from __future__ import annotations

import logging
import uuid
from typing import Literal, Optional

from pydantic import BaseModel
from tortoise.exceptions import IntegrityError
from tortoise.transactions import in_transaction

from app.core.errors import NotFoundError
from app.models.post import Post
from app.models.profile import Profile
from app.models.user import User
from app.schemas.profile import ProfileIn

logger = logging.getLogger("uvicorn.error")

NO_PROFILE_MSG = "There is no profile for this user"
OWNER_NOT_FOUND_MSG = "User not found"

SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")

EntryKind = Literal["experience", "education"]


def split_skills(raw: str | list[str] | None) -> list[str]:
    """Turn "python, sql ,go" (or a list) into ["python", "sql", "go"]."""
    if raw is None:
        return []
    items = raw if isinstance(raw, list) else str(raw).split(",")
    return [s.strip() for s in items if s and s.strip()]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ProfilePatch(BaseModel):
    """
    Partial profile document. A field left as None is not touched on update
    and simply absent on create; social links merge key by key.
    """
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: Optional[list[str]] = None
    social: dict[str, str] = {}

    @classmethod
    def from_input(cls, body: ProfileIn) -> ProfilePatch:
        skills = split_skills(body.skills)
        social = {}
        for key in SOCIAL_FIELDS:
            link = _clean(getattr(body, key))
            if link:
                social[key] = link
        return cls(
            **{name: _clean(getattr(body, name)) for name in SCALAR_FIELDS},
            skills=skills or None,
            social=social,
        )

    def fields(self) -> dict:
        """Scalar and list fields that were actually supplied."""
        out = {name: getattr(self, name) for name in SCALAR_FIELDS if getattr(self, name) is not None}
        if self.skills is not None:
            out["skills"] = list(self.skills)
        return out

    def apply(self, profile: Profile) -> None:
        for name, value in self.fields().items():
            setattr(profile, name, value)
        if self.social:
            profile.social = {**(profile.social or {}), **self.social}

    def create_kwargs(self) -> dict:
        return {**self.fields(), "social": dict(self.social)}


async def _update_existing(owner_id: uuid.UUID, patch: ProfilePatch) -> Optional[Profile]:
    async with in_transaction() as conn:
        profile = await Profile.filter(user_id=owner_id).using_db(conn).select_for_update().first()
        if profile is None:
            return None
        patch.apply(profile)
        await profile.save(using_db=conn)
    return profile


async def upsert_profile(owner_id: uuid.UUID, patch: ProfilePatch) -> Profile:
    """
    Create the owner's profile or apply the patch to the existing one.

    The unique one-to-one key on user_id decides races between concurrent
    creates: the loser gets an IntegrityError and retries as an update, so an
    owner never ends up with two profiles.
    """
    profile = await _update_existing(owner_id, patch)
    if profile is not None:
        return profile
    try:
        profile = await Profile.create(user_id=owner_id, **patch.create_kwargs())
        logger.info("[profile] created profile for user=%s", owner_id)
        return profile
    except IntegrityError:
        profile = await _update_existing(owner_id, patch)
        if profile is None:
            # No profile to update: the owner itself is gone
            if not await User.filter(id=owner_id).exists():
                raise NotFoundError(OWNER_NOT_FOUND_MSG)
            raise
        return profile


async def add_entry(owner_id: uuid.UUID, kind: EntryKind, entry: dict) -> Profile:
    """Prepend an experience/education entry (most recent first) with a fresh id."""
    async with in_transaction() as conn:
        profile = await Profile.filter(user_id=owner_id).using_db(conn).select_for_update().first()
        if profile is None:
            raise NotFoundError(NO_PROFILE_MSG)
        entries = list(getattr(profile, kind) or [])
        entries.insert(0, {"id": uuid.uuid4().hex, **entry})
        setattr(profile, kind, entries)
        await profile.save(using_db=conn)
    return profile


async def remove_entry(owner_id: uuid.UUID, kind: EntryKind, entry_id: str, missing_msg: str) -> Profile:
    """
    Remove the entry with the given id.

    Raises:
        NotFoundError: If the caller has no profile, or no entry has that id
    """
    async with in_transaction() as conn:
        profile = await Profile.filter(user_id=owner_id).using_db(conn).select_for_update().first()
        if profile is None:
            raise NotFoundError(NO_PROFILE_MSG)
        entries = list(getattr(profile, kind) or [])
        remaining = [e for e in entries if e.get("id") != entry_id]
        if len(remaining) == len(entries):
            raise NotFoundError(missing_msg)
        setattr(profile, kind, remaining)
        await profile.save(using_db=conn)
    return profile


async def delete_account(owner_id: uuid.UUID) -> None:
    """Delete the user's posts, profile and account as one unit."""
    async with in_transaction() as conn:
        posts = await Post.filter(user_id=owner_id).using_db(conn).delete()
        await Profile.filter(user_id=owner_id).using_db(conn).delete()
        await User.filter(id=owner_id).using_db(conn).delete()
    logger.info("[profile] deleted user=%s with %s post(s)", owner_id, posts)
